"""
Payment gateway factory and initialization.
"""

from functools import lru_cache

from src.integrations.payments.base import (
    BasePaymentGateway,
    CreatedOrder,
    PaymentFailure,
    PaymentGatewayError,
)
from src.integrations.payments.cashfree import CashfreeGateway


def get_payment_gateway(provider: str = "cashfree") -> BasePaymentGateway:
    """
    Get payment gateway instance.

    Args:
        provider: Provider name (only 'cashfree' is supported)

    Returns:
        Payment gateway instance
    """
    if provider == "cashfree":
        return CashfreeGateway()
    raise ValueError(f"Unknown payment provider: {provider}")


@lru_cache(maxsize=1)
def get_default_gateway() -> BasePaymentGateway:
    """Get cached default payment gateway."""
    return get_payment_gateway()


__all__ = [
    "BasePaymentGateway",
    "CashfreeGateway",
    "CreatedOrder",
    "PaymentFailure",
    "PaymentGatewayError",
    "get_payment_gateway",
    "get_default_gateway",
]
