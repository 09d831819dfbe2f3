"""Shared validation utilities"""

import re
from datetime import datetime
from typing import Optional

from ..domain.scheduling.exceptions import MalformedSlot
from ..domain.scheduling.slots import validate_slot


def validate_phone(phone: Optional[str]) -> Optional[str]:
    """
    Validate and normalize a phone number to its 10 digits.

    Args:
        phone: Phone number string in various formats (555-123-4567, (555) 123 4567)

    Returns:
        The 10 digits, no separators

    Raises:
        ValueError: If phone number is invalid
    """
    if not phone:
        return phone

    # Remove all non-digit characters
    digits = re.sub(r"\D", "", phone)

    if len(digits) != 10:
        raise ValueError("Phone number must be 10 digits")

    return digits


def validate_email(email: Optional[str]) -> Optional[str]:
    """
    Validate email format.

    Args:
        email: Email address string

    Returns:
        Lowercase email address

    Raises:
        ValueError: If email format is invalid
    """
    if not email:
        return email

    email = email.strip().lower()

    # Basic email validation pattern
    email_pattern = r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$"

    if not re.match(email_pattern, email):
        raise ValueError("Invalid email format")

    return email


def validate_available_times(slots: Optional[list[str]]) -> Optional[list[str]]:
    """Every declared slot must be HH:MM-HH:MM with start before end"""
    if slots is None:
        return slots
    try:
        return [validate_slot(slot) for slot in slots]
    except MalformedSlot as e:
        raise ValueError(str(e)) from e


def validate_local_datetime(value: Optional[datetime]) -> Optional[datetime]:
    """Appointment times are wall-clock times in the clinic's zone; offsets are rejected"""
    if value is not None and value.tzinfo is not None:
        raise ValueError("Timezone offsets are not supported; send local clinic time")
    return value
