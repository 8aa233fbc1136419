"""
Interaction log: known chats and inbound messages.
"""

import logging
import re
from datetime import datetime, timedelta, timezone
from typing import Any, Optional
from zoneinfo import ZoneInfo

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from src.db.models import Chat, MessageLog
from src.db.sqlite import Database, db

logger = logging.getLogger(__name__)

DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")
DISPLAY_TZ = ZoneInfo("Asia/Kolkata")
NO_LOGS_MESSAGE = "No logs found for this date."


def to_display_time(value: datetime) -> datetime:
    """Stored UTC timestamp in Asia/Kolkata time."""
    return value.replace(tzinfo=timezone.utc).astimezone(DISPLAY_TZ)


def format_log_line(log: MessageLog) -> str:
    """[19/10/2026, 03:45:12 PM] User: Name (@username): text"""
    stamp = to_display_time(log.created_at)
    return (
        f"[{stamp.strftime('%d/%m/%Y, %I:%M:%S %p')}] "
        f"User: {log.first_name or 'Unknown'} (@{log.username or 'N/A'}): {log.text}"
    )


class InteractionLog:
    """Reads and writes chats and message logs."""

    def __init__(self, database: Optional[Database] = None):
        self.database = database or db

    async def save_chat(self, chat: Any) -> bool:
        """
        Remember a chat.

        Args:
            chat: Object with id, type, title, first_name, username (aiogram Chat)

        Returns:
            True if the chat was already known, False if it was just saved
        """
        try:
            async with self.database.session() as session:
                existing = await session.get(Chat, chat.id)
                if existing is not None:
                    logger.debug(f"Chat already saved: {chat.id}")
                    return True

                session.add(Chat(
                    id=chat.id,
                    type=str(chat.type),
                    title=getattr(chat, "title", None),
                    first_name=getattr(chat, "first_name", None),
                    username=getattr(chat, "username", None),
                ))
        except IntegrityError:
            # Inserted by a concurrent update after the lookup
            logger.debug(f"Chat saved concurrently: {chat.id}")
            return True

        logger.info(f"Chat saved: {chat.id}")
        return False

    async def log_message(self, chat_id: int, text: str, user: Any = None) -> None:
        """Append a message to the log."""
        async with self.database.session() as session:
            session.add(MessageLog(
                chat_id=chat_id,
                user_id=getattr(user, "id", None),
                username=getattr(user, "username", None),
                first_name=getattr(user, "first_name", None),
                text=text,
            ))

    async def fetch_chat_ids(self) -> list[int]:
        """All saved chat ids, oldest first."""
        async with self.database.session() as session:
            rows = await session.execute(select(Chat.id).order_by(Chat.created_at, Chat.id))
            return list(rows.scalars().all())

    async def fetch_logs(self, date_or_chat_id: str) -> list[MessageLog]:
        """
        Logs for a UTC day (YYYY-MM-DD) or for one chat id, oldest first.

        Raises:
            ValueError: If the argument is neither a date nor a chat id
        """
        date_or_chat_id = date_or_chat_id.strip()
        stmt = select(MessageLog).order_by(MessageLog.created_at, MessageLog.id)

        if DATE_PATTERN.match(date_or_chat_id):
            day = datetime.strptime(date_or_chat_id, "%Y-%m-%d")
            stmt = stmt.where(
                MessageLog.created_at >= day,
                MessageLog.created_at < day + timedelta(days=1),
            )
        else:
            stmt = stmt.where(MessageLog.chat_id == int(date_or_chat_id))

        async with self.database.session() as session:
            return list((await session.execute(stmt)).scalars().all())

    async def get_logs(self, date_or_chat_id: str) -> str:
        """Logs rendered one line per message."""
        logs = await self.fetch_logs(date_or_chat_id)
        if not logs:
            return NO_LOGS_MESSAGE

        return "\n".join(format_log_line(log) for log in logs)


# Global interaction log
interaction_log = InteractionLog()
