"""
Start, help and about commands; greeting new group members.
"""

import logging
from html import escape

from aiogram import F, Router
from aiogram.filters import Command, CommandStart
from aiogram.types import Message

from src.config import settings
from src.db.repository import interaction_log

logger = logging.getLogger(__name__)

router = Router(name="start")


WELCOME_MESSAGE = """👋 <b>Welcome!</b>

I help you find and buy study materials for NEET and JEE.

<b>How to use me:</b>
• Send a book or subject name, e.g. <i>mtg biology</i>
• Or use <code>/study hc verma</code>
• Send your name, email and phone to get checkout links
• After payment the material link arrives here

Use /help for all commands."""


HELP_MESSAGE = """🤖 <b>Commands</b>

/study &lt;query&gt; - search study materials
/cancel - stop the current purchase
/translate [xx] - translate the message you reply to (default: English)
/contact &lt;message&gt; - write to the admin
/about - about this bot

💡 In private chat you can simply type what you are looking for."""


ABOUT_MESSAGE = """📚 <b>Study Materials Bot</b>

Search a catalog of NEET and JEE books, pay securely via Cashfree and
receive your material in @{delivery_bot}.

Questions? Use /contact."""


@router.message(CommandStart())
async def handle_start(message: Message) -> None:
    """Handle /start command."""
    await interaction_log.save_chat(message.chat)
    await message.answer(WELCOME_MESSAGE)


@router.message(Command("help"))
async def handle_help(message: Message) -> None:
    """Handle /help command."""
    await message.answer(HELP_MESSAGE)


@router.message(Command("about"))
async def handle_about(message: Message) -> None:
    await message.answer(ABOUT_MESSAGE.format(delivery_bot=settings.delivery_bot_username))


@router.message(F.new_chat_members)
async def handle_new_members(message: Message) -> None:
    """Save the group and greet whoever joined."""
    await interaction_log.save_chat(message.chat)

    names = ", ".join(escape(member.full_name) for member in message.new_chat_members if not member.is_bot)
    if not names:
        return

    logger.info(f"New members in {message.chat.id}: {names}")
    await message.answer(
        f"👋 Welcome, {names}!\n"
        f"Message @{settings.bot_username} privately to search study materials."
    )
