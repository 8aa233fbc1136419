"""
Payment webhook consumer.

Cashfree notifies the HTTP server when a payment settles. The payload is not
trusted to carry the delivery link: the order is re-fetched and its note
(written at order creation) is sent to the buyer.
"""

import logging
from dataclasses import dataclass, field
from html import escape
from typing import Any, Optional

from aiogram import Bot
from pydantic import BaseModel, ValidationError

from src.integrations.payments.base import BasePaymentGateway

logger = logging.getLogger(__name__)

CUSTOMER_ID_PREFIX = "cust_"


class CustomerDetails(BaseModel):
    customer_id: str
    customer_name: Optional[str] = None
    customer_email: Optional[str] = None
    customer_phone: Optional[str] = None


class WebhookPayload(BaseModel):
    """Fields of the notification this bot relies on."""

    order_id: str
    order_status: str
    customer_details: CustomerDetails
    payment_status: Optional[str] = None
    cf_payment_id: Optional[Any] = None

    @property
    def is_paid(self) -> bool:
        return self.order_status == "PAID" and self.payment_status == "SUCCESS"


@dataclass
class WebhookAck:
    """HTTP acknowledgement returned to the gateway."""

    status_code: int
    body: dict = field(default_factory=dict)


def chat_id_from_customer_id(customer_id: str) -> int:
    """
    Recover the buyer chat id.

    customer_id is "cust_<chat_id>_<catalog key>"; catalog keys may contain
    underscores, chat ids never do (negative ids keep their sign).

    Raises:
        ValueError: If no chat id can be parsed
    """
    return int(customer_id.removeprefix(CUSTOMER_ID_PREFIX).split("_", 1)[0])


class PaymentWebhookHandler:
    """Turns payment notifications into buyer and admin messages."""

    def __init__(self, bot: Bot, gateway: BasePaymentGateway, admin_id: int):
        self.bot = bot
        self.gateway = gateway
        self.admin_id = admin_id

    async def handle(self, payload: Any) -> WebhookAck:
        try:
            notification = WebhookPayload.model_validate(payload)
        except ValidationError as e:
            logger.warning(f"Invalid webhook payload: {e.errors()}")
            return WebhookAck(400, {"success": False, "error": "Invalid webhook payload"})

        try:
            await self._process(notification)
        except Exception as e:
            logger.error(f"Webhook processing failed for {notification.order_id}: {e}", exc_info=True)
            return WebhookAck(500, {"success": False, "error": "Webhook processing failed"})

        return WebhookAck(200, {"success": True})

    async def _process(self, notification: WebhookPayload) -> None:
        order = await self.gateway.get_order(notification.order_id)
        telegram_link = order.get("order_note")
        chat_id = chat_id_from_customer_id(notification.customer_details.customer_id)
        payment_id = notification.cf_payment_id or "N/A"
        customer_name = escape(notification.customer_details.customer_name or "Unknown")

        logger.info(
            f"Webhook for {notification.order_id}: order_status={notification.order_status}, "
            f"payment_status={notification.payment_status}, chat={chat_id}"
        )

        if notification.is_paid:
            if telegram_link:
                buyer_text = (
                    "✅ Payment received, thank you!\n\n"
                    f"Here is your material: {telegram_link}\n\n"
                    "Press START in the bot that opens to get it."
                )
            else:
                logger.warning(f"Order {notification.order_id} is paid but has no delivery link")
                buyer_text = (
                    "✅ Payment received, thank you!\n\n"
                    "We could not find the link to your material. Please contact us with "
                    f"/contact and your order id: {notification.order_id}"
                )

            await self.bot.send_message(chat_id, buyer_text)
            await self.bot.send_message(
                self.admin_id,
                "💰 Payment successful\n"
                f"Order ID: {notification.order_id}\n"
                f"Payment ID: {payment_id}\n"
                f"Customer: {customer_name}\n"
                f"Chat ID: {chat_id}\n"
                f"Link: {telegram_link or 'N/A (missing order note)'}",
            )
        else:
            await self.bot.send_message(
                chat_id,
                "❌ Your payment did not go through.\n"
                "If money was deducted, contact us with /contact and your order id: "
                f"{notification.order_id}",
            )
            await self.bot.send_message(
                self.admin_id,
                "⚠️ Payment failed\n"
                f"Order ID: {notification.order_id}\n"
                f"Payment ID: {payment_id}\n"
                f"Status: {notification.order_status} / {notification.payment_status or 'N/A'}\n"
                f"Customer: {customer_name}\n"
                f"Chat ID: {chat_id}",
            )
