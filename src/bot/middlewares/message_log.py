"""
Outer middleware writing every inbound text message to the interaction log.
"""

import logging
from typing import Any, Awaitable, Callable

from aiogram import BaseMiddleware
from aiogram.types import Message, TelegramObject

from src.db.repository import InteractionLog, interaction_log

logger = logging.getLogger(__name__)


class MessageLogMiddleware(BaseMiddleware):
    def __init__(self, log: InteractionLog | None = None):
        self.log = log or interaction_log

    async def __call__(
        self,
        handler: Callable[[TelegramObject, dict[str, Any]], Awaitable[Any]],
        event: TelegramObject,
        data: dict[str, Any],
    ) -> Any:
        if isinstance(event, Message) and event.text:
            try:
                await self.log.log_message(event.chat.id, event.text, event.from_user)
            except Exception as e:
                # Logging must not block the update
                logger.warning(f"Failed to log message from {event.chat.id}: {e}")

        return await handler(event, data)
