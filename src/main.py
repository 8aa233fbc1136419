"""
Study Materials Bot - Main entry point.

Runs Telegram polling and the HTTP server (payment webhook, checkout return
page) in one event loop.
"""

import asyncio
import logging
import sys

import uvicorn

from src.api.app import create_app
from src.bot.bot import get_bot, get_dispatcher
from src.bot.handlers import register_handlers
from src.config import settings
from src.core.catalog import get_catalog
from src.db.sqlite import db
from src.integrations.shortener import link_shortener
from src.integrations.telegraph import telegraph_publisher


# Fix for Windows asyncio
if sys.platform == "win32":
    asyncio.set_event_loop_policy(asyncio.WindowsSelectorEventLoopPolicy())


# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


async def on_startup() -> None:
    """Initialize services on startup."""
    logger.info("Starting Study Materials Bot...")

    await db.init()
    logger.info("Database initialized")

    get_catalog()
    logger.info(f"Cashfree environment: {settings.cashfree_environment}")


async def on_shutdown() -> None:
    """Cleanup on shutdown."""
    logger.info("Shutting down Study Materials Bot...")

    await telegraph_publisher.close()
    await link_shortener.close()
    await db.close()

    logger.info("Cleanup complete")


async def run_http_server(bot) -> None:
    config = uvicorn.Config(
        create_app(bot),
        host=settings.webhook_host,
        port=settings.webhook_port,
        log_level="debug" if settings.debug else "info",
    )
    await uvicorn.Server(config).serve()


async def main() -> None:
    """Main function to run the bot and the HTTP server."""
    bot = get_bot()
    dp = get_dispatcher()

    register_handlers(dp)

    dp.startup.register(on_startup)
    dp.shutdown.register(on_shutdown)

    logger.info(f"Bot is starting, HTTP on {settings.webhook_host}:{settings.webhook_port}...")
    try:
        await asyncio.gather(
            dp.start_polling(bot, allowed_updates=dp.resolve_used_update_types()),
            run_http_server(bot),
        )
    finally:
        await bot.session.close()


if __name__ == "__main__":
    asyncio.run(main())
