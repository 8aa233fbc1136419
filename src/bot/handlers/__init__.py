"""
Bot handlers registration.
"""

from aiogram import Dispatcher

from src.bot.handlers.admin import router as admin_router
from src.bot.handlers.start import router as start_router
from src.bot.handlers.study import router as study_router
from src.bot.handlers.translate import router as translate_router


def register_handlers(dp: Dispatcher) -> None:
    """Register all handlers to dispatcher."""
    # Order matters: admin swipe-replies must be seen before the study
    # router treats plain text as a search query
    dp.include_router(admin_router)
    dp.include_router(start_router)
    dp.include_router(translate_router)
    dp.include_router(study_router)
