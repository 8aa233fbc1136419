"""
Tests for the HTTP API (webhook, order helpers, return page).
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from src.api.app import create_app
from src.integrations.payments import CreatedOrder, PaymentFailure, PaymentGatewayError

LINK = "https://t.me/Material_eduhubkmrbot?start=mtg_bio_pyq"

CREATE_ORDER_BODY = {
    "productId": "555_mtg_bio_pyq",
    "productName": "MTG Biology PYQ",
    "amount": 100,
    "telegramLink": LINK,
    "customerName": "John Doe",
    "customerEmail": "john@example.com",
    "customerPhone": "9876543210",
}


@pytest.fixture
def bot() -> MagicMock:
    bot = MagicMock()
    bot.send_message = AsyncMock()
    return bot


@pytest.fixture
def gateway() -> MagicMock:
    gateway = MagicMock()
    gateway.name = "cashfree"
    gateway.create_order = AsyncMock()
    gateway.get_order = AsyncMock(return_value={"order_note": LINK})
    gateway.close = AsyncMock()
    return gateway


@pytest.fixture
def client(bot, gateway):
    with TestClient(create_app(bot, gateway)) as client:
        yield client


class TestWebhookEndpoint:

    def test_paid_notification(self, client, bot):
        response = client.post("/api/webhook", json={
            "order_id": "ORDER_1",
            "order_status": "PAID",
            "payment_status": "SUCCESS",
            "cf_payment_id": 1,
            "customer_details": {"customer_id": "cust_555_mtg_bio_pyq"},
        })

        assert response.status_code == 200
        assert response.json() == {"success": True}
        assert bot.send_message.await_count == 2

    def test_missing_customer_details_is_400(self, client, bot):
        response = client.post("/api/webhook", json={"order_id": "ORDER_1", "order_status": "PAID"})

        assert response.status_code == 400
        assert response.json()["success"] is False
        bot.send_message.assert_not_awaited()

    def test_non_json_body_is_400(self, client):
        response = client.post(
            "/api/webhook", content=b"not json", headers={"Content-Type": "application/json"}
        )

        assert response.status_code == 400

    def test_gateway_failure_is_500(self, client, gateway):
        gateway.get_order.side_effect = PaymentGatewayError("down")

        response = client.post("/api/webhook", json={
            "order_id": "ORDER_1",
            "order_status": "PAID",
            "customer_details": {"customer_id": "cust_555_key"},
        })

        assert response.status_code == 500


class TestCreateOrderEndpoint:

    def test_created(self, client, gateway):
        gateway.create_order.return_value = CreatedOrder(
            order_id="ORDER_1",
            payment_session_id="session_1",
            checkout_url="https://payments-test.cashfree.com/order/#session_1",
            telegram_link=LINK,
        )

        response = client.post("/api/cashfree/create-order", json=CREATE_ORDER_BODY)

        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "orderId": "ORDER_1",
            "paymentSessionId": "session_1",
            "checkoutUrl": "https://payments-test.cashfree.com/order/#session_1",
            "telegramLink": LINK,
        }
        kwargs = gateway.create_order.await_args.kwargs
        assert kwargs["product_id"] == "555_mtg_bio_pyq"
        assert kwargs["customer_phone"] == "9876543210"

    def test_gateway_failure_is_500(self, client, gateway):
        gateway.create_order.return_value = PaymentFailure(
            reason="Failed to create Cashfree order", provider_details={"code": "x"}
        )

        response = client.post("/api/cashfree/create-order", json=CREATE_ORDER_BODY)

        assert response.status_code == 500
        assert response.json()["error"] == "Failed to create Cashfree order"

    @pytest.mark.parametrize("field", ["productId", "amount", "customerEmail"])
    def test_missing_field_is_400(self, client, gateway, field):
        body = {k: v for k, v in CREATE_ORDER_BODY.items() if k != field}

        response = client.post("/api/cashfree/create-order", json=body)

        assert response.status_code == 400
        assert response.json() == {"success": False, "error": "Missing required fields"}
        gateway.create_order.assert_not_awaited()

    def test_empty_field_is_400(self, client):
        response = client.post(
            "/api/cashfree/create-order", json={**CREATE_ORDER_BODY, "customerName": ""}
        )

        assert response.status_code == 400


class TestOrderDetailsEndpoint:

    def test_returns_link(self, client, gateway):
        response = client.post("/api/cashfree/order", json={"orderId": "ORDER_1"})

        assert response.status_code == 200
        assert response.json() == {"success": True, "telegramLink": LINK}
        gateway.get_order.assert_awaited_once_with("ORDER_1")

    def test_missing_order_id_is_400(self, client):
        response = client.post("/api/cashfree/order", json={})

        assert response.status_code == 400
        assert response.json()["error"] == "Missing orderId"

    def test_gateway_error_is_500(self, client, gateway):
        gateway.get_order.side_effect = PaymentGatewayError("not found")

        response = client.post("/api/cashfree/order", json={"orderId": "ORDER_404"})

        assert response.status_code == 500


class TestPages:

    def test_success_page_fetches_order(self, client):
        response = client.get("/success", params={"order_id": "ORDER_1", "product_id": "555_k"})

        assert response.status_code == 200
        assert "text/html" in response.headers["content-type"]
        assert "Order ID: ORDER_1" in response.text
        assert "/api/cashfree/order" in response.text

    def test_success_page_escapes_order_id(self, client):
        response = client.get("/success", params={"order_id": "<script>x</script>"})

        assert "<script>x</script>" not in response.text

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "ok"}


class TestLifespan:

    def test_gateway_closed_on_shutdown(self, bot, gateway):
        with TestClient(create_app(bot, gateway)):
            pass

        gateway.close.assert_awaited_once()
