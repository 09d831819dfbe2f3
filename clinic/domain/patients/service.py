"""Patient service - Sign-up, profile and appointment history"""

import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from ...models import AppointmentStatus, Patient
from ...security_utils import hash_password
from ..scheduling.exceptions import (
    DuplicateAccount,
    OwnershipMismatch,
    StorageFailure,
    UnknownPatient,
)
from ..scheduling.repository import AppointmentRepository
from ..scheduling.schemas import AppointmentRow
from ..scheduling.service import to_appointment_row
from .repository import PatientRepository
from .schemas import PatientCreate

logger = logging.getLogger(__name__)

# History filter: past visits are the completed ones, future visits still scheduled
CONDITION_STATUS = {
    "past": AppointmentStatus.COMPLETED.value,
    "future": AppointmentStatus.SCHEDULED.value,
}


class PatientService:
    """Service layer for patient business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = PatientRepository()
        self.appointments = AppointmentRepository()

    def create_patient(self, data: PatientCreate) -> Patient:
        """Register a patient; email and phone must both be unused"""
        if self.repo.get_patient_by_email_or_phone(self.db, data.email, data.phone):
            logger.warning(f"⚠️ Sign-up rejected, email or phone already registered: {data.email}")
            raise DuplicateAccount("Patient with email id or phone no already exist")

        try:
            patient = self.repo.create_patient(
                self.db,
                name=data.name,
                email=data.email,
                password_hash=hash_password(data.password),
                phone=data.phone,
                address=data.address,
            )
        except IntegrityError as e:
            self.db.rollback()
            raise DuplicateAccount("Patient with email id or phone no already exist") from e
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"❌ Error saving patient: {e}")
            raise StorageFailure("Internal server error") from e

        logger.info(f"🆕 Patient {patient.id} signed up")
        return patient

    def get_patient(self, patient_id: int) -> Patient:
        patient = self.repo.get_patient_by_id(self.db, patient_id)
        if not patient:
            raise UnknownPatient(f"Patient not found with id: {patient_id}")
        return patient

    def get_appointments(
        self, patient_id: int, owner_email: Optional[str] = None
    ) -> list[AppointmentRow]:
        """Every appointment of a patient, earliest first.

        With ``owner_email`` the caller must be that patient.
        """
        patient = self.get_patient(patient_id)
        if owner_email is not None and patient.email != owner_email:
            logger.warning(f"⚠️ {owner_email} tried to read appointments of patient {patient_id}")
            raise OwnershipMismatch()
        rows = self.appointments.get_patient_rows(self.db, patient_id)
        return [to_appointment_row(*row) for row in rows]

    def filter_appointments(
        self,
        patient_id: int,
        condition: Optional[str] = None,
        doctor_name: Optional[str] = None,
    ) -> list[AppointmentRow]:
        """Appointments by condition ("past"/"future") and doctor name substring"""
        status = None
        if condition:
            status = CONDITION_STATUS.get(condition.strip().lower())
            if status is None:
                raise ValueError(f"Unknown condition: {condition}")

        rows = self.appointments.get_patient_rows(self.db, patient_id, status, doctor_name)
        return [to_appointment_row(*row) for row in rows]
