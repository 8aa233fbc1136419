"""
Cashfree Payment Gateway implementation.
Creates hosted-checkout orders and looks them up for webhook handling.
"""

import logging
import random
import time
from typing import Any

import httpx

from src.config import settings
from src.integrations.payments.base import (
    BasePaymentGateway,
    CreatedOrder,
    PaymentFailure,
    PaymentGatewayError,
)

logger = logging.getLogger(__name__)


def generate_order_id() -> str:
    """Time-based order id with a random suffix; not checked against the gateway."""
    return f"ORDER_{int(time.time() * 1000)}_{random.randint(0, 999)}"


def _error_details(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text


class CashfreeGateway(BasePaymentGateway):
    """Cashfree PG (orders API)."""

    def __init__(
        self,
        client_id: str | None = None,
        client_secret: str | None = None,
        api_base: str | None = None,
        checkout_base: str | None = None,
        public_base_url: str | None = None,
        api_version: str | None = None,
        timeout: float | None = None,
        client: httpx.AsyncClient | None = None,
    ):
        self.client_id = client_id if client_id is not None else settings.cashfree_client_id
        self.client_secret = (
            client_secret if client_secret is not None else settings.cashfree_client_secret
        )
        self.api_base = (api_base or settings.cashfree_api_base).rstrip("/")
        self.checkout_base = checkout_base or settings.cashfree_checkout_base
        self.public_base_url = (public_base_url or settings.public_base_url).rstrip("/")
        self.api_version = api_version or settings.cashfree_api_version
        self.timeout = timeout if timeout is not None else settings.http_timeout
        self._client = client

        if not (self.client_id and self.client_secret):
            logger.warning("Cashfree credentials are not set, order requests will be rejected")

    def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(timeout=self.timeout)
        return self._client

    @property
    def _headers(self) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "x-api-version": self.api_version,
            "x-client-id": self.client_id,
            "x-client-secret": self.client_secret,
        }

    def build_order_payload(
        self,
        order_id: str,
        product_id: str,
        amount: float,
        telegram_link: str,
        customer_name: str,
        customer_email: str,
        customer_phone: str,
    ) -> dict:
        """Body of POST /orders."""
        return {
            "order_id": order_id,
            "order_amount": amount,
            "order_currency": "INR",
            "customer_details": {
                "customer_id": f"cust_{product_id}",
                "customer_name": customer_name,
                "customer_email": customer_email,
                "customer_phone": customer_phone,
            },
            "order_meta": {
                # {order_id} is substituted by Cashfree
                "return_url": (
                    f"{self.public_base_url}/success"
                    f"?order_id={{order_id}}&product_id={product_id}"
                ),
                "notify_url": f"{self.public_base_url}/api/webhook",
            },
            "order_note": telegram_link,
        }

    def checkout_url(self, payment_session_id: str) -> str:
        return f"{self.checkout_base}{payment_session_id}"

    async def create_order(
        self,
        product_id: str,
        product_name: str,
        amount: float,
        telegram_link: str,
        customer_name: str,
        customer_email: str,
        customer_phone: str,
    ) -> CreatedOrder | PaymentFailure:
        """Create a Cashfree order and derive its checkout URL."""
        order_id = generate_order_id()
        payload = self.build_order_payload(
            order_id=order_id,
            product_id=product_id,
            amount=amount,
            telegram_link=telegram_link,
            customer_name=customer_name,
            customer_email=customer_email,
            customer_phone=customer_phone,
        )

        logger.info(f"Creating Cashfree order {order_id} for {product_name} ({product_id})")

        try:
            response = await self._get_client().post(
                f"{self.api_base}/orders", json=payload, headers=self._headers
            )
        except httpx.HTTPError as e:
            logger.error(f"Cashfree order creation failed for {order_id}: {e}")
            return PaymentFailure(reason="Payment gateway unreachable", provider_details=str(e))

        if not response.is_success:
            details = _error_details(response)
            logger.error(
                f"Cashfree order creation failed for {order_id}: "
                f"HTTP {response.status_code} {details}"
            )
            return PaymentFailure(
                reason="Failed to create Cashfree order", provider_details=details
            )

        try:
            session_id = response.json()["payment_session_id"]
        except (ValueError, KeyError, TypeError):
            details = _error_details(response)
            logger.error(f"Cashfree returned no payment_session_id for {order_id}: {details}")
            return PaymentFailure(
                reason="Malformed response from payment gateway", provider_details=details
            )

        return CreatedOrder(
            order_id=order_id,
            payment_session_id=session_id,
            checkout_url=self.checkout_url(session_id),
            telegram_link=telegram_link,
        )

    async def get_order(self, order_id: str) -> dict:
        """Fetch an order by id (GET /orders/{order_id})."""
        try:
            response = await self._get_client().get(
                f"{self.api_base}/orders/{order_id}", headers=self._headers
            )
        except httpx.HTTPError as e:
            raise PaymentGatewayError(f"Failed to fetch order {order_id}: {e}") from e

        if not response.is_success:
            details = _error_details(response)
            raise PaymentGatewayError(
                f"Failed to fetch order {order_id}: HTTP {response.status_code}",
                provider_details=details,
            )

        try:
            return response.json()
        except ValueError as e:
            raise PaymentGatewayError(
                f"Order {order_id} response is not JSON", provider_details=response.text
            ) from e

    async def close(self) -> None:
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    @property
    def name(self) -> str:
        return "cashfree"
