"""
Validators for buyer contact details.
"""

import re
from typing import Optional, Tuple

from src.core.orders.models import ContactDetails


class EmailValidator:
    """Validate e-mail addresses (local@domain.tld)."""

    EMAIL_PATTERN = re.compile(r'^[^\s@]+@[^\s@]+\.[^\s@]+$')

    @classmethod
    def validate(cls, email: str) -> Tuple[bool, Optional[str], Optional[str]]:
        """
        Validate e-mail.

        Returns:
            Tuple of (is_valid, normalized_email, error_message)
        """
        email = email.strip()

        if not email:
            return False, None, "Email cannot be empty"

        if not cls.EMAIL_PATTERN.match(email):
            return False, None, "Invalid email. Example: name@example.com"

        return True, email, None


class PhoneValidator:
    """Validate Indian mobile numbers."""

    PHONE_PATTERN = re.compile(r'^\d{10}$')

    @classmethod
    def validate(cls, phone: str) -> Tuple[bool, Optional[str], Optional[str]]:
        """
        Validate phone number.

        Returns:
            Tuple of (is_valid, phone, error_message)
        """
        phone = phone.strip()

        if not phone:
            return False, None, "Phone number cannot be empty"

        if not cls.PHONE_PATTERN.match(phone):
            return False, None, "Invalid phone number. Enter exactly 10 digits, e.g. 9876543210"

        return True, phone, None


class ContactDetailsValidator:
    """Parse and validate 'name, email, phone' messages."""

    MIN_NAME_LENGTH = 2

    @classmethod
    def validate(cls, text: str) -> Tuple[bool, Optional[ContactDetails], Optional[str]]:
        """
        Validate a comma-separated contact message.

        All field errors are reported together so the buyer can fix them in
        one go.

        Returns:
            Tuple of (is_valid, contact_details, error_message)
        """
        parts = [part.strip() for part in (text or "").split(",")]

        if len(parts) != 3:
            return False, None, (
                "Please send your details in one message as:\n"
                "Name, email, phone\n"
                "Example: John Doe, john@example.com, 9876543210"
            )

        name, email, phone = parts
        errors = []

        if len(name) < cls.MIN_NAME_LENGTH:
            errors.append("Name is too short")

        email_ok, email, email_error = EmailValidator.validate(email)
        if not email_ok:
            errors.append(email_error)

        phone_ok, phone, phone_error = PhoneValidator.validate(phone)
        if not phone_ok:
            errors.append(phone_error)

        if errors:
            return False, None, "\n".join(f"• {e}" for e in errors)

        return True, ContactDetails(name=name, email=email, phone=phone), None
