"""Doctor repository - Database operations for doctors"""

from typing import Optional

from sqlalchemy.orm import Session

from ...models import Doctor


class DoctorRepository:
    """Repository for doctor database operations"""

    @staticmethod
    def get_doctors(db: Session) -> list[Doctor]:
        """Get all doctors ordered by ID"""
        return db.query(Doctor).order_by(Doctor.id.asc()).all()

    @staticmethod
    def get_doctor_by_id(db: Session, doctor_id: int) -> Optional[Doctor]:
        """Get a doctor by ID"""
        return db.query(Doctor).filter(Doctor.id == doctor_id).first()

    @staticmethod
    def get_doctor_for_update(db: Session, doctor_id: int) -> Optional[Doctor]:
        """Get a doctor by ID and lock the row until the transaction ends.

        Serializes bookings for the same doctor on databases that support
        SELECT ... FOR UPDATE.
        """
        return db.query(Doctor).filter(Doctor.id == doctor_id).with_for_update().first()

    @staticmethod
    def get_doctor_by_email(db: Session, email: str) -> Optional[Doctor]:
        """Get a doctor by email"""
        return db.query(Doctor).filter(Doctor.email == email).first()

    @staticmethod
    def create_doctor(db: Session, **doctor_data) -> Doctor:
        """Create a new doctor"""
        doctor = Doctor(**doctor_data)
        db.add(doctor)
        db.commit()
        db.refresh(doctor)
        return doctor

    @staticmethod
    def update_doctor(db: Session, doctor: Doctor, **updates) -> Doctor:
        """Update a doctor with provided fields"""
        for key, value in updates.items():
            if value is not None and hasattr(doctor, key):
                setattr(doctor, key, value)

        db.commit()
        db.refresh(doctor)
        return doctor

    @staticmethod
    def delete_doctor(db: Session, doctor: Doctor) -> None:
        """Delete a doctor"""
        db.delete(doctor)
        db.commit()
