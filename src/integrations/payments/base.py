"""
Base interface for payment gateways.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any


@dataclass
class CreatedOrder:
    """Order accepted by the gateway."""

    order_id: str
    payment_session_id: str
    checkout_url: str
    telegram_link: str


@dataclass
class PaymentFailure:
    """Order creation failed; nothing to retry here."""

    reason: str
    provider_details: Any = None


class PaymentGatewayError(Exception):
    """Gateway call failed where a value is required (order lookups)."""

    def __init__(self, message: str, provider_details: Any = None):
        super().__init__(message)
        self.provider_details = provider_details


class BasePaymentGateway(ABC):
    """Abstract base class for payment gateways."""

    @abstractmethod
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
        """
        Create an order for one product.

        Args:
            product_id: "<chat_id>_<catalog key>"
            product_name: Human readable item label
            amount: Price in INR
            telegram_link: Delivery link stored as the order note
            customer_name: Buyer name
            customer_email: Buyer e-mail
            customer_phone: Buyer 10-digit phone

        Returns:
            CreatedOrder with the checkout URL, or PaymentFailure
        """
        pass

    @abstractmethod
    async def get_order(self, order_id: str) -> dict:
        """Fetch an order; raises PaymentGatewayError on failure."""
        pass

    @abstractmethod
    async def close(self) -> None:
        """Release HTTP resources."""
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        """Provider name."""
        pass
