"""
Unit tests for the Cashfree gateway client.
"""

import json
import re

import httpx
import pytest

from src.integrations.payments import (
    CashfreeGateway,
    CreatedOrder,
    PaymentFailure,
    PaymentGatewayError,
)
from src.integrations.payments.cashfree import generate_order_id

SANDBOX_API = "https://sandbox.cashfree.com/pg"
SANDBOX_CHECKOUT = "https://payments-test.cashfree.com/order/#"


def make_gateway(handler, **kwargs) -> CashfreeGateway:
    return CashfreeGateway(
        client_id="cf_id",
        client_secret="cf_secret",
        api_base=SANDBOX_API,
        checkout_base=SANDBOX_CHECKOUT,
        public_base_url="https://bot.example.com/",
        client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
        **kwargs,
    )


ORDER_ARGS = dict(
    product_id="555_mtg_bio_pyq",
    product_name="MTG Biology PYQ",
    amount=100,
    telegram_link="https://t.me/Material_eduhubkmrbot?start=mtg_bio_pyq",
    customer_name="John Doe",
    customer_email="john@example.com",
    customer_phone="9876543210",
)


class TestGenerateOrderId:

    def test_format(self):
        assert re.fullmatch(r"ORDER_\d{13}_\d{1,3}", generate_order_id())


class TestCreateOrder:
    """Tests for CashfreeGateway.create_order()."""

    @pytest.mark.asyncio
    async def test_success_returns_checkout_url_with_session_id(self):
        requests = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(200, json={"payment_session_id": "session_abc"})

        gateway = make_gateway(handler)
        result = await gateway.create_order(**ORDER_ARGS)

        assert isinstance(result, CreatedOrder)
        assert result.checkout_url == f"{SANDBOX_CHECKOUT}session_abc"
        assert result.payment_session_id == "session_abc"
        assert result.telegram_link == ORDER_ARGS["telegram_link"]
        assert result.order_id.startswith("ORDER_")

        request = requests[0]
        assert request.method == "POST"
        assert str(request.url) == f"{SANDBOX_API}/orders"
        assert request.headers["x-client-id"] == "cf_id"
        assert request.headers["x-client-secret"] == "cf_secret"
        assert request.headers["x-api-version"] == "2022-09-01"

    @pytest.mark.asyncio
    async def test_payload_carries_link_as_order_note(self):
        bodies = []

        def handler(request: httpx.Request) -> httpx.Response:
            bodies.append(json.loads(request.content))
            return httpx.Response(200, json={"payment_session_id": "s"})

        result = await make_gateway(handler).create_order(**ORDER_ARGS)
        body = bodies[0]

        assert body["order_id"] == result.order_id
        assert body["order_amount"] == 100
        assert body["order_currency"] == "INR"
        assert body["order_note"] == ORDER_ARGS["telegram_link"]
        assert body["customer_details"] == {
            "customer_id": "cust_555_mtg_bio_pyq",
            "customer_name": "John Doe",
            "customer_email": "john@example.com",
            "customer_phone": "9876543210",
        }
        assert body["order_meta"] == {
            "return_url": "https://bot.example.com/success?order_id={order_id}&product_id=555_mtg_bio_pyq",
            "notify_url": "https://bot.example.com/api/webhook",
        }

    @pytest.mark.asyncio
    async def test_production_checkout_base(self):
        gateway = CashfreeGateway(
            client_id="id",
            client_secret="secret",
            checkout_base="https://payments.cashfree.com/order/#",
            client=httpx.AsyncClient(
                transport=httpx.MockTransport(
                    lambda r: httpx.Response(200, json={"payment_session_id": "live_1"})
                )
            ),
        )

        result = await gateway.create_order(**ORDER_ARGS)

        assert result.checkout_url == "https://payments.cashfree.com/order/#live_1"

    @pytest.mark.asyncio
    async def test_http_error_status_is_failure(self):
        gateway = make_gateway(
            lambda r: httpx.Response(400, json={"message": "order_amount invalid"})
        )

        result = await gateway.create_order(**ORDER_ARGS)

        assert isinstance(result, PaymentFailure)
        assert result.reason == "Failed to create Cashfree order"
        assert result.provider_details == {"message": "order_amount invalid"}

    @pytest.mark.asyncio
    async def test_network_error_is_failure(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectTimeout("timed out", request=request)

        result = await make_gateway(handler).create_order(**ORDER_ARGS)

        assert isinstance(result, PaymentFailure)
        assert "timed out" in result.provider_details

    @pytest.mark.asyncio
    async def test_missing_session_id_is_failure(self):
        gateway = make_gateway(lambda r: httpx.Response(200, json={"order_id": "x"}))

        result = await gateway.create_order(**ORDER_ARGS)

        assert isinstance(result, PaymentFailure)
        assert result.reason.startswith("Malformed response")


class TestGetOrder:
    """Tests for CashfreeGateway.get_order()."""

    @pytest.mark.asyncio
    async def test_returns_order(self):
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.method == "GET"
            assert str(request.url) == f"{SANDBOX_API}/orders/ORDER_1"
            return httpx.Response(200, json={"order_id": "ORDER_1", "order_note": "https://t.me/x"})

        order = await make_gateway(handler).get_order("ORDER_1")

        assert order["order_note"] == "https://t.me/x"

    @pytest.mark.asyncio
    async def test_error_status_raises(self):
        gateway = make_gateway(lambda r: httpx.Response(404, json={"message": "not found"}))

        with pytest.raises(PaymentGatewayError) as exc_info:
            await gateway.get_order("ORDER_404")

        assert exc_info.value.provider_details == {"message": "not found"}

    @pytest.mark.asyncio
    async def test_network_error_raises(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        with pytest.raises(PaymentGatewayError):
            await make_gateway(handler).get_order("ORDER_1")


class TestClose:

    @pytest.mark.asyncio
    async def test_close_releases_client(self):
        gateway = make_gateway(lambda r: httpx.Response(200, json={}))

        await gateway.close()

        assert gateway._client is None
        assert gateway.name == "cashfree"
