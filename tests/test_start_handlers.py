"""
Tests for /start, /help, /about and new member greetings.
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from src.bot.handlers import start
from tests.conftest import make_message


@pytest.fixture
def saved_chats():
    log = MagicMock()
    log.save_chat = AsyncMock(return_value=False)
    with patch.object(start, "interaction_log", log):
        yield log


def member(full_name: str, is_bot: bool = False) -> MagicMock:
    user = MagicMock()
    user.full_name = full_name
    user.is_bot = is_bot
    return user


class TestStart:

    @pytest.mark.asyncio
    async def test_saves_chat_and_welcomes(self, saved_chats):
        message = make_message("/start")

        await start.handle_start(message)

        saved_chats.save_chat.assert_awaited_once_with(message.chat)
        assert message.answer.await_args.args[0] == start.WELCOME_MESSAGE

    @pytest.mark.asyncio
    async def test_help_lists_commands(self):
        message = make_message("/help")

        await start.handle_help(message)

        text = message.answer.await_args.args[0]
        for command in ("/study", "/cancel", "/translate", "/contact"):
            assert command in text

    @pytest.mark.asyncio
    async def test_about_names_delivery_bot(self):
        message = make_message("/about")

        with patch.object(start.settings, "delivery_bot_username", "materials_delivery_bot"):
            await start.handle_about(message)

        assert "@materials_delivery_bot" in message.answer.await_args.args[0]


class TestNewMembers:

    @pytest.mark.asyncio
    async def test_greets_people_not_bots(self, saved_chats):
        message = make_message(chat_id=-100200, chat_type="supergroup")
        message.new_chat_members = [member("Ravi <K>"), member("Spam Bot", is_bot=True)]

        await start.handle_new_members(message)

        saved_chats.save_chat.assert_awaited_once_with(message.chat)
        text = message.answer.await_args.args[0]
        assert "Ravi &lt;K&gt;" in text
        assert "Spam Bot" not in text

    @pytest.mark.asyncio
    async def test_only_bots_joined(self, saved_chats):
        message = make_message(chat_id=-100200, chat_type="supergroup")
        message.new_chat_members = [member("Other Bot", is_bot=True)]

        await start.handle_new_members(message)

        saved_chats.save_chat.assert_awaited_once()
        message.answer.assert_not_awaited()
