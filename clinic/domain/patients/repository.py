"""Patient repository - Database operations for patients"""

from typing import Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session

from ...models import Patient


class PatientRepository:
    """Repository for patient database operations"""

    @staticmethod
    def get_patient_by_id(db: Session, patient_id: int) -> Optional[Patient]:
        """Get a patient by ID"""
        return db.query(Patient).filter(Patient.id == patient_id).first()

    @staticmethod
    def get_patient_by_email(db: Session, email: str) -> Optional[Patient]:
        """Get a patient by email"""
        return db.query(Patient).filter(Patient.email == email).first()

    @staticmethod
    def get_patient_by_email_or_phone(db: Session, email: str, phone: str) -> Optional[Patient]:
        """Get a patient matching either email or phone"""
        return db.query(Patient).filter(or_(Patient.email == email, Patient.phone == phone)).first()

    @staticmethod
    def create_patient(db: Session, **patient_data) -> Patient:
        """Create a new patient"""
        patient = Patient(**patient_data)
        db.add(patient)
        db.commit()
        db.refresh(patient)
        return patient
