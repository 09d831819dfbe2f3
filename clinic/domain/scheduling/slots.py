"""Slot model - one-hour windows and their "HH:MM-HH:MM" encoding"""

import re
from datetime import datetime, timedelta

from .exceptions import MalformedSlot

SLOT_DURATION = timedelta(hours=1)
TIME_FORMAT = "%H:%M"

_SLOT_PATTERN = re.compile(r"^(\d{1,2}):(\d{2})-(\d{1,2}):(\d{2})$")


def slot_end(start: datetime) -> datetime:
    return start + SLOT_DURATION


def format_slot(start: datetime) -> str:
    """Canonical slot string for an appointment starting at ``start``.

    >>> format_slot(datetime(2030, 1, 2, 9, 0))
    '09:00-10:00'
    """
    return f"{start.strftime(TIME_FORMAT)}-{slot_end(start).strftime(TIME_FORMAT)}"


def parse_slot(slot: str) -> tuple[tuple[int, int], tuple[int, int]]:
    """Split a declared slot into ((start_h, start_m), (end_h, end_m)).

    Raises MalformedSlot if the string is not two hour:minute fields.
    """
    match = _SLOT_PATTERN.match(slot.strip()) if isinstance(slot, str) else None
    if not match:
        raise MalformedSlot(f"Malformed slot: {slot!r}")

    start_h, start_m, end_h, end_m = (int(part) for part in match.groups())
    if start_h > 23 or end_h > 23 or start_m > 59 or end_m > 59:
        raise MalformedSlot(f"Malformed slot: {slot!r}")
    return (start_h, start_m), (end_h, end_m)


def slot_start_hour(slot: str) -> int:
    """Start hour of a declared slot, used for morning/afternoon checks"""
    (start_h, _), _ = parse_slot(slot)
    return start_h


def validate_slot(slot: str) -> str:
    """Check a declared slot is well formed with start < end, return it zero-padded"""
    (start_h, start_m), (end_h, end_m) = parse_slot(slot)
    if (start_h, start_m) >= (end_h, end_m):
        raise MalformedSlot(f"Slot start must be before end: {slot!r}")
    return f"{start_h:02d}:{start_m:02d}-{end_h:02d}:{end_m:02d}"
