"""
Shared test fixtures.

Settings are read from the environment when src.config is first imported,
so the required values are seeded here before any project import.
"""

import os

os.environ.setdefault("TELEGRAM_BOT_TOKEN", "123456789:AAEtesttoken")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("CASHFREE_ENVIRONMENT", "sandbox")

from collections.abc import AsyncGenerator
from unittest.mock import AsyncMock, MagicMock

import pytest
from aiogram.enums import ChatType
from aiogram.fsm.context import FSMContext
from aiogram.fsm.storage.base import StorageKey
from aiogram.fsm.storage.memory import MemoryStorage

from src.core.catalog import parse_catalog
from src.db.repository import InteractionLog
from src.db.sqlite import Database


# =============================================================================
# Catalog
# =============================================================================


SAMPLE_CATALOG = [
    {
        "title": "Biology",
        "items": [
            {"label": "MTG Fingertips", "key": "mtg_bio_fingertips"},
            {"label": "NCERT Notes", "key": "ncert_bio"},
        ],
    },
    {
        "title": "Physics",
        "items": [
            {"label": "HC Verma Vol 1", "key": "hcv_1"},
            {"label": "MTG PYQ", "key": "mtg_phy_pyq"},
        ],
    },
]


@pytest.fixture
def catalog():
    """Small catalog: Biology (2 items), Physics (2 items)."""
    return parse_catalog(SAMPLE_CATALOG)


# =============================================================================
# Database
# =============================================================================


@pytest.fixture
async def database() -> AsyncGenerator[Database, None]:
    """Fresh in-memory database per test."""
    database = Database("sqlite+aiosqlite:///:memory:")
    await database.init()
    yield database
    await database.close()


@pytest.fixture
async def interaction_log(database: Database) -> InteractionLog:
    return InteractionLog(database)


# =============================================================================
# Telegram
# =============================================================================


@pytest.fixture
def fsm_state() -> FSMContext:
    """Real FSM context backed by memory storage."""
    return FSMContext(
        storage=MemoryStorage(),
        key=StorageKey(bot_id=1, chat_id=555, user_id=555),
    )


def make_message(
    text: str = "",
    chat_id: int = 555,
    user_id: int = 555,
    chat_type: str = ChatType.PRIVATE,
    username: str | None = "student",
) -> MagicMock:
    """
    Mock aiogram Message with async reply methods and a mock bot.
    """
    user = MagicMock()
    user.id = user_id
    user.username = username
    user.first_name = "Asha"
    user.full_name = "Asha Rao"
    user.is_bot = False

    message = MagicMock()
    message.text = text
    message.message_id = 1
    message.chat.id = chat_id
    message.chat.type = chat_type
    message.chat.title = None
    message.chat.first_name = "Asha"
    message.chat.username = username
    message.from_user = user
    message.reply_to_message = None
    message.answer = AsyncMock()
    message.reply = AsyncMock()
    message.answer_document = AsyncMock()
    message.bot.send_message = AsyncMock()
    message.bot.send_chat_action = AsyncMock()
    return message


@pytest.fixture
def message_factory():
    return make_message
