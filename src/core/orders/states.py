"""
FSM states for the study search dialogue.
"""

from aiogram.fsm.state import State, StatesGroup


class StudyStates(StatesGroup):
    """States for search -> contact details -> checkout flow."""

    # Results shown, waiting for "name, email, phone"
    awaiting_contact_details = State()
