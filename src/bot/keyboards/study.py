"""
Inline keyboards for the study search dialogue.
"""

from aiogram.types import InlineKeyboardButton, InlineKeyboardMarkup
from aiogram.utils.keyboard import InlineKeyboardBuilder

CANCEL_CALLBACK = "study:cancel"


def get_cancel_keyboard() -> InlineKeyboardMarkup:
    """Single "Cancel" button under the contact-details prompt."""
    builder = InlineKeyboardBuilder()
    builder.row(InlineKeyboardButton(text="❌ Cancel", callback_data=CANCEL_CALLBACK))
    return builder.as_markup()


def get_results_page_keyboard(url: str) -> InlineKeyboardMarkup:
    """Link to the published results page plus a cancel button."""
    builder = InlineKeyboardBuilder()
    builder.row(InlineKeyboardButton(text="📖 Open results", url=url))
    builder.row(InlineKeyboardButton(text="❌ Cancel", callback_data=CANCEL_CALLBACK))
    return builder.as_markup()
