"""
Availability resolution

A doctor declares a date-independent list of slot strings. The free slots for a
date are the declared ones minus the slots consumed by that doctor's
appointments on the same calendar day.
"""

import logging
from collections.abc import Iterable
from datetime import date, datetime, time
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ...models import Doctor
from ..doctors.repository import DoctorRepository
from .exceptions import StorageFailure, UnknownDoctor
from .repository import AppointmentRepository
from .slots import format_slot

logger = logging.getLogger(__name__)


class ExactSlotMatch:
    """Booked-slot policy: exact string equality, not interval overlap.

    An appointment consumes a declared slot only when its start formats to
    exactly that "HH:MM-HH:MM" string. A 09:15 appointment therefore leaves
    "09:00-10:00" free even though the two windows overlap.
    """

    name = "exact"

    @staticmethod
    def slot_for(start: datetime) -> str:
        return format_slot(start)

    @classmethod
    def booked_slots(cls, starts: Iterable[datetime]) -> set[str]:
        return {cls.slot_for(start) for start in starts}


def day_bounds(day: date) -> tuple[datetime, datetime]:
    """Full calendar day, inclusive on both ends"""
    return datetime.combine(day, time.min), datetime.combine(day, time.max)


def subtract_booked(
    declared: list[str], booked_starts: Iterable[datetime], policy=ExactSlotMatch
) -> list[str]:
    """Declared slots (order and duplicates kept) minus the booked ones"""
    booked = policy.booked_slots(booked_starts)
    return [slot for slot in declared if slot not in booked]


class AvailabilityResolver:
    """Computes free slots against the appointment store"""

    policy = ExactSlotMatch

    def __init__(self, db: Session):
        self.db = db
        self.doctors = DoctorRepository()
        self.repo = AppointmentRepository()

    def free_slots(self, doctor_id: int, day: date) -> list[str]:
        """Free slot strings for a doctor on a date"""
        doctor = self._query(self.doctors.get_doctor_by_id, doctor_id)
        if not doctor:
            raise UnknownDoctor(f"Doctor not found with ID: {doctor_id}", status_code=404)
        return self.free_slots_for(doctor, day)

    def free_slots_for(
        self, doctor: Doctor, day: date, exclude_appointment_id: Optional[int] = None
    ) -> list[str]:
        """Free slots for an already loaded doctor.

        ``exclude_appointment_id`` leaves one appointment out of the booked
        set, so a reschedule does not conflict with its own prior slot.
        """
        start, end = day_bounds(day)
        appointments = self._query(
            self.repo.get_doctor_appointments_between,
            doctor.id,
            start,
            end,
            exclude_id=exclude_appointment_id,
        )
        free = subtract_booked(
            list(doctor.available_times or []),
            (appt.appointment_time for appt in appointments),
            self.policy,
        )
        logger.debug(
            f"Doctor {doctor.id} on {day}: {len(free)} free of {len(doctor.available_times or [])} declared"
        )
        return free

    def is_free(
        self, doctor: Doctor, start: datetime, exclude_appointment_id: Optional[int] = None
    ) -> bool:
        """True if the slot derived from ``start`` is offered and not yet booked"""
        free = self.free_slots_for(doctor, start.date(), exclude_appointment_id)
        return self.policy.slot_for(start) in free

    def _query(self, operation, *args, **kwargs):
        try:
            return operation(self.db, *args, **kwargs)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"❌ Storage failure while resolving availability: {e}")
            raise StorageFailure() from e
