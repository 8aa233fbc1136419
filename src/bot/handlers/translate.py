"""
/translate [xx] in reply to a message.
"""

import logging

from aiogram import Router
from aiogram.filters import Command, CommandObject
from aiogram.types import Message

from src.integrations.translator import TranslationError, translate

logger = logging.getLogger(__name__)

router = Router(name="translate")

DEFAULT_LANGUAGE = "en"


def parse_language(args: str | None) -> str:
    """Two-letter destination language, English otherwise."""
    code = (args or "").split()[:1]
    if code and len(code[0]) == 2 and code[0].isalpha():
        return code[0].lower()
    return DEFAULT_LANGUAGE


@router.message(Command("translate"))
async def handle_translate(message: Message, command: CommandObject) -> None:
    replied = message.reply_to_message
    text = replied and (replied.text or replied.caption)
    if not text:
        await message.answer("Please reply to a message containing the text you want to translate.")
        return

    try:
        translation = await translate(text, destination=parse_language(command.args))
    except TranslationError as e:
        logger.error(f"Translate failed: {e}")
        await message.answer("Translation failed. Please try again later.")
        return

    await message.answer(translation.format_html(), disable_web_page_preview=True)
