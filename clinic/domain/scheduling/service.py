"""Appointment service - Booking, rescheduling, cancellation and completion"""

import logging
from collections.abc import Callable
from datetime import date, datetime
from typing import Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from ...models import Appointment, AppointmentStatus, Doctor, Patient
from ..doctors.repository import DoctorRepository
from ..patients.repository import PatientRepository
from .availability import AvailabilityResolver, day_bounds
from .exceptions import (
    OwnershipMismatch,
    SlotUnavailable,
    StorageFailure,
    UnknownAppointment,
    UnknownDoctor,
    UnknownPatient,
)
from .repository import AppointmentRepository
from .schemas import AppointmentRow
from .slots import slot_end

logger = logging.getLogger(__name__)


def to_appointment_row(appointment: Appointment, doctor: Doctor, patient: Patient) -> AppointmentRow:
    """Assemble the denormalized listing row from an explicit join result"""
    return AppointmentRow(
        id=appointment.id,
        doctorId=doctor.id,
        doctorName=doctor.name,
        patientId=patient.id,
        patientName=patient.name,
        patientEmail=patient.email,
        patientPhone=patient.phone,
        patientAddress=patient.address,
        appointmentTime=appointment.appointment_time,
        endTime=slot_end(appointment.appointment_time),
        status=appointment.status,
    )


class AppointmentService:
    """
    Service layer for the appointment lifecycle.

    State machine: scheduled → completed (one-way); scheduled → deleted on
    cancellation. Not-found and ownership checks run before any write.
    """

    def __init__(self, db: Session, clock: Callable[[], datetime] = datetime.now):
        self.db = db
        self.clock = clock
        self.repo = AppointmentRepository()
        self.doctors = DoctorRepository()
        self.patients = PatientRepository()
        self.availability = AvailabilityResolver(db)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def book(self, doctor_id: int, patient_id: int, start_time: datetime) -> Appointment:
        """Create a scheduled appointment if the slot is offered and free"""
        doctor = self._read(self.doctors.get_doctor_for_update, doctor_id)
        if not doctor:
            self.db.rollback()
            logger.warning(f"⚠️ Booking rejected: doctor {doctor_id} does not exist")
            raise UnknownDoctor()

        if not self._read(self.patients.get_patient_by_id, patient_id):
            self.db.rollback()
            raise UnknownPatient(f"Patient not found with ID: {patient_id}")

        self._ensure_bookable(doctor, start_time)

        appointment = self._write(
            self.repo.create_appointment,
            doctor_id=doctor.id,
            patient_id=patient_id,
            appointment_time=start_time,
            status=AppointmentStatus.SCHEDULED.value,
        )
        logger.info(
            f"📅 Appointment {appointment.id} booked: doctor {doctor.id}, patient {patient_id}, {start_time.isoformat()}"
        )
        return appointment

    def reschedule(self, appointment_id: int, patient_id: int, new_time: datetime) -> Appointment:
        """Move an appointment owned by ``patient_id``; status is unchanged"""
        appointment = self._read(self.repo.get_appointment_by_id, appointment_id)
        if not appointment:
            raise UnknownAppointment(f"No appointment available with id: {appointment_id}")

        if appointment.patient_id != patient_id:
            logger.warning(
                f"⚠️ Patient {patient_id} tried to reschedule appointment {appointment_id} owned by {appointment.patient_id}"
            )
            raise OwnershipMismatch()

        doctor = self._read(self.doctors.get_doctor_for_update, appointment.doctor_id)
        if not doctor:
            self.db.rollback()
            raise UnknownDoctor()

        self._ensure_bookable(doctor, new_time, exclude_appointment_id=appointment.id)

        appointment = self._write(self.repo.update_appointment_time, appointment, new_time)
        logger.info(f"🔁 Appointment {appointment.id} rescheduled to {new_time.isoformat()}")
        return appointment

    def cancel(self, appointment_id: int, caller_email: str) -> None:
        """Hard delete an appointment; only its patient may cancel it"""
        appointment = self._read(self.repo.get_appointment_by_id, appointment_id)
        if not appointment:
            raise UnknownAppointment(f"No appointment for given id: {appointment_id}")

        patient = self._read(self.patients.get_patient_by_email, caller_email)
        if not patient or patient.id != appointment.patient_id:
            logger.warning(f"⚠️ {caller_email} tried to cancel appointment {appointment_id}")
            raise OwnershipMismatch()

        self._write(self.repo.delete_appointment, appointment)
        logger.info(f"🗑️ Appointment {appointment_id} cancelled by patient {patient.id}")

    def complete(self, appointment_id: int) -> None:
        """Mark an appointment completed. Repeating the call is a no-op."""
        updated = self._write(
            self.repo.update_status, appointment_id, AppointmentStatus.COMPLETED.value
        )
        if not updated:
            raise UnknownAppointment(f"No appointment available with id: {appointment_id}")
        logger.info(f"✅ Appointment {appointment_id} completed")

    # ------------------------------------------------------------------
    # Read projections
    # ------------------------------------------------------------------

    def list_for_date(
        self, doctor_id: int, day: date, patient_name: Optional[str] = None
    ) -> list[AppointmentRow]:
        """A doctor's appointments on one calendar day"""
        start, end = day_bounds(day)
        rows = self._read(self.repo.get_doctor_rows_between, doctor_id, start, end, patient_name)
        return [to_appointment_row(*row) for row in rows]

    def upcoming(
        self,
        doctor_id: int,
        now: Optional[datetime] = None,
        patient_name: Optional[str] = None,
    ) -> list[AppointmentRow]:
        """A doctor's appointments starting at or after ``now``, earliest first"""
        rows = self._read(self.repo.get_upcoming_rows, doctor_id, now or self.clock(), patient_name)
        return [to_appointment_row(*row) for row in rows]

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _ensure_bookable(
        self, doctor: Doctor, start_time: datetime, exclude_appointment_id: Optional[int] = None
    ) -> None:
        if start_time <= self.clock():
            self.db.rollback()
            logger.warning(f"⚠️ Rejected past start time {start_time.isoformat()} for doctor {doctor.id}")
            raise SlotUnavailable("Appointment time must be in the future")

        if not self.availability.is_free(doctor, start_time, exclude_appointment_id):
            self.db.rollback()
            logger.warning(
                f"⚠️ Slot {AvailabilityResolver.policy.slot_for(start_time)} on {start_time.date()} unavailable for doctor {doctor.id}"
            )
            raise SlotUnavailable()

    def _read(self, operation, *args, **kwargs):
        """Run a repository read or row lock; roll back and translate storage errors"""
        try:
            return operation(self.db, *args, **kwargs)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"❌ Storage failure during appointment read: {e}")
            raise StorageFailure() from e

    def _write(self, operation, *args, **kwargs):
        """Run a repository write; roll back and translate storage errors"""
        try:
            return operation(self.db, *args, **kwargs)
        except IntegrityError as e:
            self.db.rollback()
            # Lost the race for this (doctor, start) pair
            logger.warning(f"⚠️ Concurrent booking conflict: {e.orig}")
            raise SlotUnavailable() from e
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"❌ Storage failure during appointment write: {e}")
            raise StorageFailure() from e
