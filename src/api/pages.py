"""
Browser-facing pages.
"""

from html import escape

from fastapi import APIRouter
from fastapi.responses import HTMLResponse

from src.config import settings

router = APIRouter(tags=["pages"])


@router.get("/success", response_class=HTMLResponse)
async def payment_success(order_id: str = "", product_id: str = "") -> HTMLResponse:
    """
    Checkout return page.

    Looks the order up through /api/cashfree/order and sends the browser on to
    the delivery link; otherwise asks the buyer to contact support.
    """
    shown_order_id = escape(order_id) if order_id else "Loading..."
    support = escape(settings.bot_username)

    html = f"""
<!doctype html>
<html>
<head><meta charset="utf-8"><title>Payment Successful</title></head>
<body style="text-align: center; padding: 50px; font-family: sans-serif;">
<h1>Payment Successful!</h1>
<p>Order ID: {shown_order_id}</p>
<p id="status">Redirecting you to your material...</p>
<p>If you are not redirected, please contact support on
<a href="https://t.me/{support}">@{support}</a> with your Order ID.</p>
<script>
const params = new URLSearchParams(window.location.search);
const orderId = params.get("order_id");
const fallback = "Payment successful, but we could not find your material link. Please contact support.";

if (orderId) {{
  fetch("/api/cashfree/order", {{
    method: "POST",
    headers: {{"Content-Type": "application/json"}},
    body: JSON.stringify({{orderId: orderId}}),
  }})
    .then((response) => response.json())
    .then((data) => {{
      if (data.success && data.telegramLink) {{
        window.location.href = data.telegramLink;
      }} else {{
        document.getElementById("status").textContent = fallback;
      }}
    }})
    .catch(() => {{
      document.getElementById("status").textContent = fallback;
    }});
}}
</script>
</body>
</html>
"""
    return HTMLResponse(html)


@router.get("/health")
async def health() -> dict:
    return {"status": "ok"}
