"""Doctor service - Doctor administration, search and availability"""

import logging
from datetime import date
from typing import Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from ...models import Doctor
from ...security_utils import hash_password
from ..scheduling.availability import AvailabilityResolver
from ..scheduling.exceptions import DuplicateAccount, StorageFailure, UnknownDoctor
from ..scheduling.repository import AppointmentRepository
from .filters import TimeOfDay, filter_doctors
from .repository import DoctorRepository
from .schemas import DoctorCreate, DoctorUpdate

logger = logging.getLogger(__name__)


class DoctorService:
    """Service layer for doctor business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = DoctorRepository()
        self.appointments = AppointmentRepository()

    def get_doctors(self) -> list[Doctor]:
        """All doctors ordered by ID"""
        return self.repo.get_doctors(self.db)

    def get_doctor(self, doctor_id: int) -> Doctor:
        doctor = self.repo.get_doctor_by_id(self.db, doctor_id)
        if not doctor:
            raise UnknownDoctor(f"Doctor not found with id: {doctor_id}", status_code=404)
        return doctor

    def create_doctor(self, data: DoctorCreate) -> Doctor:
        """Create a doctor account; emails are unique"""
        if self.repo.get_doctor_by_email(self.db, data.email):
            logger.warning(f"⚠️ Doctor with email {data.email} already exists")
            raise DuplicateAccount("Doctor already exists")

        try:
            doctor = self.repo.create_doctor(
                self.db,
                name=data.name,
                specialty=data.specialty,
                email=data.email,
                password_hash=hash_password(data.password),
                phone=data.phone,
                available_times=data.availableTimes,
            )
        except IntegrityError as e:
            self.db.rollback()
            raise DuplicateAccount("Doctor already exists") from e
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"❌ Error saving doctor: {e}")
            raise StorageFailure("Some internal error occurred") from e

        logger.info(f"🩺 Doctor {doctor.id} created ({doctor.specialty})")
        return doctor

    def update_doctor(self, doctor_id: int, data: DoctorUpdate) -> Doctor:
        """Update profile fields and declared availability"""
        doctor = self.get_doctor(doctor_id)

        updates = {}
        if data.name is not None:
            updates["name"] = data.name
        if data.specialty is not None:
            updates["specialty"] = data.specialty
        if data.email is not None:
            updates["email"] = data.email
        if data.phone is not None:
            updates["phone"] = data.phone
        if data.availableTimes is not None:
            updates["available_times"] = data.availableTimes

        try:
            return self.repo.update_doctor(self.db, doctor, **updates)
        except IntegrityError as e:
            self.db.rollback()
            raise DuplicateAccount("Email already used by another doctor") from e
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"❌ Error updating doctor {doctor_id}: {e}")
            raise StorageFailure("Some internal error occurred") from e

    def delete_doctor(self, doctor_id: int) -> dict:
        """Delete a doctor together with all of the doctor's appointments"""
        doctor = self.get_doctor(doctor_id)

        try:
            removed = self.appointments.delete_all_by_doctor(self.db, doctor.id)
            self.repo.delete_doctor(self.db, doctor)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"❌ Error deleting doctor {doctor_id}: {e}")
            raise StorageFailure("Some internal error occurred") from e

        logger.info(f"🗑️ Doctor {doctor_id} deleted with {removed} appointment(s)")
        return {"message": f"Doctor deleted successfully with id: {doctor_id}"}

    def filter_doctors(
        self,
        name: Optional[str] = None,
        specialty: Optional[str] = None,
        time_of_day: Optional[TimeOfDay] = None,
    ) -> list[Doctor]:
        """Doctors matching name, specialty and time-of-day predicates"""
        return filter_doctors(self.repo.get_doctors(self.db), name, specialty, time_of_day)

    def get_availability(self, doctor_id: int, day: date) -> list[str]:
        """Free slot strings for a doctor on a date"""
        return AvailabilityResolver(self.db).free_slots(doctor_id, day)
