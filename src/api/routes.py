"""
JSON endpoints: payment webhook and Cashfree order helpers.
"""

import logging
from typing import Any

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from src.api.schemas import CreateOrderRequest, OrderDetailsRequest
from src.integrations.payments import PaymentFailure, PaymentGatewayError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["payments"])


async def _read_json(request: Request) -> Any:
    try:
        return await request.json()
    except ValueError:
        return None


@router.post("/webhook")
async def payment_webhook(request: Request) -> JSONResponse:
    """Cashfree payment notification."""
    payload = await _read_json(request)
    ack = await request.app.state.webhook_handler.handle(payload)
    return JSONResponse(ack.body, status_code=ack.status_code)


@router.post("/cashfree/create-order")
async def create_order(request: Request) -> JSONResponse:
    try:
        body = CreateOrderRequest.model_validate(await _read_json(request))
    except ValidationError:
        return JSONResponse({"success": False, "error": "Missing required fields"}, status_code=400)

    result = await request.app.state.gateway.create_order(
        product_id=body.product_id,
        product_name=body.product_name,
        amount=body.amount,
        telegram_link=body.telegram_link,
        customer_name=body.customer_name,
        customer_email=body.customer_email,
        customer_phone=body.customer_phone,
    )

    if isinstance(result, PaymentFailure):
        return JSONResponse(
            {"success": False, "error": result.reason, "details": result.provider_details},
            status_code=500,
        )

    return JSONResponse({
        "success": True,
        "orderId": result.order_id,
        "paymentSessionId": result.payment_session_id,
        "checkoutUrl": result.checkout_url,
        "telegramLink": result.telegram_link,
    })


@router.post("/cashfree/order")
async def order_details(request: Request) -> JSONResponse:
    """Delivery link of an order, used by the return page."""
    try:
        body = OrderDetailsRequest.model_validate(await _read_json(request))
    except ValidationError:
        return JSONResponse({"success": False, "error": "Missing orderId"}, status_code=400)

    try:
        order = await request.app.state.gateway.get_order(body.order_id)
    except PaymentGatewayError as e:
        logger.error(f"Failed to fetch order details: {e} {e.provider_details}")
        return JSONResponse(
            {"success": False, "error": "Failed to fetch order details"}, status_code=500
        )

    return JSONResponse({"success": True, "telegramLink": order.get("order_note")})
