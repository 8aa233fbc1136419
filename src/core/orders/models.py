"""
Order models for the study materials bot.
"""

from dataclasses import dataclass
from enum import Enum
from html import escape
from typing import Optional


class OrderStatus(Enum):
    """Local view of an order's lifecycle."""
    CREATED = "created"          # Accepted by the gateway, checkout link issued
    FAILED = "failed"            # Gateway rejected the order


@dataclass
class ContactDetails:
    """Buyer contact details collected in the dialogue."""
    name: str
    email: str
    phone: str


@dataclass
class PendingOrder:
    """Local copy of an order created at the gateway."""
    order_id: str
    item_key: str
    telegram_link: str
    customer_name: str
    customer_email: str
    customer_phone: str
    checkout_url: Optional[str] = None


@dataclass
class OrderOutcome:
    """Result of one order request inside a purchase dialogue."""
    label: str
    status: OrderStatus
    order: Optional[PendingOrder] = None
    reason: Optional[str] = None

    @property
    def is_success(self) -> bool:
        return self.status == OrderStatus.CREATED

    def format_line(self) -> str:
        """One line of the combined checkout reply."""
        if self.is_success and self.order:
            return f'✅ {escape(self.label)}: <a href="{escape(self.order.checkout_url or "")}">Pay now</a>'
        return f"❌ {escape(self.label)}: {escape(self.reason or 'order could not be created')}"


def format_outcomes(outcomes: list[OrderOutcome]) -> str:
    """Combined reply listing all outcomes of a purchase."""
    succeeded = sum(1 for o in outcomes if o.is_success)
    lines = [
        f"🧾 <b>Checkout links</b> ({succeeded}/{len(outcomes)} created)",
        "",
    ]
    lines.extend(o.format_line() for o in outcomes)
    if succeeded:
        lines.append("")
        lines.append("After payment the material link is sent to you here.")
    return "\n".join(lines)
