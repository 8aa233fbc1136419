"""
Contact relay and admin commands: reply, broadcast, logs.
"""

import logging
import re
from html import escape

from aiogram import F, Router
from aiogram.exceptions import TelegramAPIError
from aiogram.filters import Command, CommandObject
from aiogram.types import FSInputFile, Message

from src.config import settings
from src.core.logs.exporter import log_exporter
from src.db.repository import NO_LOGS_MESSAGE, format_log_line, interaction_log

logger = logging.getLogger(__name__)

router = Router(name="admin")

UNAUTHORIZED_MESSAGE = "You are not authorized to use this command."
CHAT_ID_PATTERN = re.compile(r"Chat ID: (-?\d+)")
MESSAGE_LIMIT = 4096


def is_admin(message: Message) -> bool:
    return message.from_user is not None and message.from_user.id == settings.admin_id


def admin_reply_text(text: str) -> str:
    return f"<b>Admin's Reply:</b>\n{escape(text)}"


# =============================================================================
# CONTACT
# =============================================================================

@router.message(Command("contact"))
async def handle_contact(message: Message, command: CommandObject) -> None:
    """Relay /contact <message> (or the replied-to message) to the admin."""
    text = command.args
    if not text and message.reply_to_message:
        text = message.reply_to_message.text or message.reply_to_message.caption

    if not text:
        await message.answer("Please provide a message or reply to a message using /contact.")
        return

    user = message.from_user
    sender = escape(user.full_name) if user else "Unknown"
    if user and user.username:
        sender += f" (@{user.username})"

    await message.bot.send_message(
        settings.admin_id,
        f"📩 <b>Contact Message</b>\n"
        f"From: {sender}\n"
        f"Chat ID: {message.chat.id}\n\n"
        f"Message:\n{escape(text)}",
    )
    await message.answer("✅ Your message has been sent to the admin!")


@router.message(
    F.from_user.id == settings.admin_id,
    F.reply_to_message.text.regexp(CHAT_ID_PATTERN, mode="search").as_("chat_match"),
    F.text,
    ~F.text.startswith("/"),
)
async def handle_swipe_reply(message: Message, chat_match: re.Match) -> None:
    """Admin answers a relayed message by replying to it."""
    target_id = int(chat_match.group(1))
    try:
        await message.bot.send_message(target_id, admin_reply_text(message.text))
    except TelegramAPIError as e:
        logger.error(f"Failed to send swipe reply to {target_id}: {e}")
        await message.answer(f"❌ Failed to send reply to {target_id}")
        return

    await message.answer(f"✅ Reply sent to {target_id}")


# =============================================================================
# ADMIN COMMANDS
# =============================================================================

@router.message(Command("reply"))
async def handle_reply(message: Message, command: CommandObject) -> None:
    """/reply <chat_id> <message>"""
    if not is_admin(message):
        await message.answer(UNAUTHORIZED_MESSAGE)
        return

    parts = (command.args or "").split(maxsplit=1)
    if len(parts) < 2:
        await message.answer("Usage:\n/reply &lt;chat_id&gt; &lt;message&gt;")
        return

    chat_id_text, text = parts
    try:
        target_id = int(chat_id_text)
    except ValueError:
        await message.answer(f"Invalid chat ID: {escape(chat_id_text)}")
        return

    try:
        await message.bot.send_message(target_id, admin_reply_text(text))
    except TelegramAPIError as e:
        logger.error(f"Reply to {target_id} failed: {e}")
        await message.answer(f"❌ Failed to send reply to {target_id}")
        return

    await message.answer(f"✅ Reply sent to {target_id}")


@router.message(Command("broadcast"))
async def handle_broadcast(message: Message, command: CommandObject) -> None:
    """/broadcast <message> to every saved chat."""
    if not is_admin(message):
        await message.answer(UNAUTHORIZED_MESSAGE)
        return

    if not command.args:
        await message.answer("Usage:\n/broadcast &lt;message&gt;")
        return

    chat_ids = await interaction_log.fetch_chat_ids()
    sent, failed = 0, 0

    for chat_id in chat_ids:
        try:
            await message.bot.send_message(chat_id, escape(command.args))
            sent += 1
        except TelegramAPIError as e:
            logger.warning(f"Broadcast to {chat_id} failed: {e}")
            failed += 1

    logger.info(f"Broadcast finished: {sent} sent, {failed} failed")
    await message.answer(f"📣 Broadcast finished.\nSent: {sent}\nFailed: {failed}")


@router.message(Command("logs"))
async def handle_logs(message: Message, command: CommandObject) -> None:
    """/logs <YYYY-MM-DD | chat_id>"""
    if not is_admin(message):
        await message.answer(UNAUTHORIZED_MESSAGE)
        return

    selector = (command.args or "").strip()
    if not selector:
        await message.answer("Usage:\n/logs &lt;YYYY-MM-DD | chat_id&gt;")
        return

    try:
        logs = await interaction_log.fetch_logs(selector)
    except ValueError:
        await message.answer(f"Invalid date or chat ID: {escape(selector)}")
        return

    if not logs:
        await message.answer(NO_LOGS_MESSAGE)
        return

    text = escape("\n".join(format_log_line(log) for log in logs))
    if len(text) <= MESSAGE_LIMIT:
        await message.answer(text)
        return

    path = log_exporter.export(logs, title=selector)
    await message.answer_document(
        FSInputFile(path),
        caption=f"📎 {len(logs)} messages for {escape(selector)}",
    )
