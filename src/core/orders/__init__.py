"""
Orders module for the study materials bot.
Handles contact collection, validation and order outcomes.
"""

from src.core.orders.models import (
    ContactDetails,
    OrderOutcome,
    OrderStatus,
    PendingOrder,
    format_outcomes,
)
from src.core.orders.states import StudyStates
from src.core.orders.validators import (
    ContactDetailsValidator,
    EmailValidator,
    PhoneValidator,
)

__all__ = [
    # Models
    "ContactDetails",
    "OrderOutcome",
    "OrderStatus",
    "PendingOrder",
    "format_outcomes",
    # States
    "StudyStates",
    # Validators
    "ContactDetailsValidator",
    "EmailValidator",
    "PhoneValidator",
]
