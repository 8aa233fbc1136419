"""
Delivery links for catalog items.
"""

from src.config import settings


def delivery_link(key: str, bot_username: str | None = None) -> str:
    """Deep link into the delivery bot that hands out the material for `key`."""
    username = bot_username or settings.delivery_bot_username
    return f"https://t.me/{username}?start={key}"
