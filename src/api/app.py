"""
FastAPI application serving the payment webhook and the checkout return page.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from aiogram import Bot
from fastapi import FastAPI

from src.api import pages, routes
from src.config import settings
from src.core.payments.webhook import PaymentWebhookHandler
from src.integrations.payments import BasePaymentGateway, get_default_gateway

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"HTTP server ready, payment provider: {app.state.gateway.name}")
    yield
    await app.state.gateway.close()
    logger.info("Payment gateway client closed")


def create_app(bot: Bot, gateway: Optional[BasePaymentGateway] = None) -> FastAPI:
    """
    Build the HTTP application.

    Args:
        bot: Bot used to message buyers and the admin from webhooks
        gateway: Payment gateway (default: the configured Cashfree gateway)
    """
    gateway = gateway or get_default_gateway()

    app = FastAPI(title="Study Materials Bot", lifespan=lifespan)
    app.state.bot = bot
    app.state.gateway = gateway
    app.state.webhook_handler = PaymentWebhookHandler(
        bot=bot, gateway=gateway, admin_id=settings.admin_id
    )

    app.include_router(routes.router)
    app.include_router(pages.router)
    return app
