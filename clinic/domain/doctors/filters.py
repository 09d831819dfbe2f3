"""Doctor search predicates: name, specialty and time of day"""

import enum
from collections.abc import Iterable
from typing import Optional

from ..scheduling.exceptions import MalformedSlot
from ..scheduling.slots import slot_start_hour

# Query values that mean "do not filter on this field"
NO_FILTER_VALUES = {"", "null"}


class TimeOfDay(str, enum.Enum):
    MORNING = "morning"
    AFTERNOON = "afternoon"

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional["TimeOfDay"]:
        """Accept AM/PM or morning/afternoon; None for the no-filter sentinel"""
        if is_no_filter(value):
            return None
        normalized = value.strip().lower()
        if normalized in ("am", "morning"):
            return cls.MORNING
        if normalized in ("pm", "afternoon"):
            return cls.AFTERNOON
        raise ValueError(f"Unknown time of day: {value}")


def is_no_filter(value: Optional[str]) -> bool:
    return value is None or value.strip().lower() in NO_FILTER_VALUES


def _slot_matches(slot: str, predicate: TimeOfDay) -> bool:
    try:
        hour = slot_start_hour(slot)
    except MalformedSlot:
        # One bad entry must not hide the doctor's other slots
        return False
    return hour < 12 if predicate is TimeOfDay.MORNING else hour >= 12


def matches_time_of_day(doctor, predicate: Optional[TimeOfDay]) -> bool:
    """True if any declared slot starts in the requested half of the day"""
    if predicate is None:
        return True
    return any(_slot_matches(slot, predicate) for slot in doctor.available_times or [])


def matches_name(doctor, name: Optional[str]) -> bool:
    if is_no_filter(name):
        return True
    return name.strip().lower() in (doctor.name or "").lower()


def matches_specialty(doctor, specialty: Optional[str]) -> bool:
    if is_no_filter(specialty):
        return True
    return (doctor.specialty or "").lower() == specialty.strip().lower()


def filter_doctors(
    doctors: Iterable,
    name: Optional[str] = None,
    specialty: Optional[str] = None,
    time_of_day: Optional[TimeOfDay] = None,
) -> list:
    """Doctors satisfying every active predicate, in input order"""
    return [
        doctor
        for doctor in doctors
        if matches_name(doctor, name)
        and matches_specialty(doctor, specialty)
        and matches_time_of_day(doctor, time_of_day)
    ]
