"""Appointment repository - Database operations for appointments"""

from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session

from ...models import Appointment, Doctor, Patient

# (appointment, doctor, patient) joined at read time for listings
AppointmentRowTuple = tuple[Appointment, Doctor, Patient]


class AppointmentRepository:
    """Repository for appointment database operations"""

    @staticmethod
    def get_appointment_by_id(db: Session, appointment_id: int) -> Optional[Appointment]:
        """Get an appointment by ID"""
        return db.query(Appointment).filter(Appointment.id == appointment_id).first()

    @staticmethod
    def get_doctor_appointments_between(
        db: Session,
        doctor_id: int,
        start: datetime,
        end: datetime,
        exclude_id: Optional[int] = None,
    ) -> list[Appointment]:
        """Appointments for a doctor with start in [start, end]"""
        query = db.query(Appointment).filter(
            Appointment.doctor_id == doctor_id,
            Appointment.appointment_time >= start,
            Appointment.appointment_time <= end,
        )
        if exclude_id is not None:
            query = query.filter(Appointment.id != exclude_id)
        return query.order_by(Appointment.appointment_time.asc()).all()

    @staticmethod
    def _joined(db: Session):
        return (
            db.query(Appointment, Doctor, Patient)
            .join(Doctor, Appointment.doctor_id == Doctor.id)
            .join(Patient, Appointment.patient_id == Patient.id)
        )

    @staticmethod
    def get_doctor_rows_between(
        db: Session,
        doctor_id: int,
        start: datetime,
        end: datetime,
        patient_name: Optional[str] = None,
    ) -> list[AppointmentRowTuple]:
        """Appointments for a doctor on a day, optionally by patient name substring"""
        query = AppointmentRepository._joined(db).filter(
            Appointment.doctor_id == doctor_id,
            Appointment.appointment_time >= start,
            Appointment.appointment_time <= end,
        )
        if patient_name:
            query = query.filter(Patient.name.ilike(f"%{patient_name}%"))
        return query.order_by(Appointment.appointment_time.asc()).all()

    @staticmethod
    def get_upcoming_rows(
        db: Session,
        doctor_id: int,
        now: datetime,
        patient_name: Optional[str] = None,
    ) -> list[AppointmentRowTuple]:
        """Appointments for a doctor starting at or after ``now``, earliest first"""
        query = AppointmentRepository._joined(db).filter(
            Appointment.doctor_id == doctor_id,
            Appointment.appointment_time >= now,
        )
        if patient_name:
            query = query.filter(Patient.name.ilike(f"%{patient_name}%"))
        return query.order_by(Appointment.appointment_time.asc(), Appointment.id.asc()).all()

    @staticmethod
    def get_patient_rows(
        db: Session,
        patient_id: int,
        status: Optional[str] = None,
        doctor_name: Optional[str] = None,
    ) -> list[AppointmentRowTuple]:
        """Appointments of a patient, optionally by status and doctor name substring"""
        query = AppointmentRepository._joined(db).filter(Appointment.patient_id == patient_id)
        if status:
            query = query.filter(Appointment.status == status)
        if doctor_name:
            query = query.filter(Doctor.name.ilike(f"%{doctor_name}%"))
        return query.order_by(Appointment.appointment_time.asc()).all()

    @staticmethod
    def create_appointment(db: Session, **appointment_data) -> Appointment:
        """Create a new appointment"""
        appointment = Appointment(**appointment_data)
        db.add(appointment)
        db.commit()
        db.refresh(appointment)
        return appointment

    @staticmethod
    def update_appointment_time(
        db: Session, appointment: Appointment, appointment_time: datetime
    ) -> Appointment:
        """Move an appointment, leaving its status alone"""
        appointment.appointment_time = appointment_time
        db.commit()
        db.refresh(appointment)
        return appointment

    @staticmethod
    def update_status(db: Session, appointment_id: int, status: str) -> int:
        """Status-only update; returns the number of matched rows"""
        updated = (
            db.query(Appointment)
            .filter(Appointment.id == appointment_id)
            .update({Appointment.status: status}, synchronize_session="fetch")
        )
        db.commit()
        return updated

    @staticmethod
    def delete_appointment(db: Session, appointment: Appointment) -> None:
        """Hard delete an appointment"""
        db.delete(appointment)
        db.commit()

    @staticmethod
    def delete_all_by_doctor(db: Session, doctor_id: int) -> int:
        """Delete every appointment of a doctor. Caller commits."""
        return (
            db.query(Appointment)
            .filter(Appointment.doctor_id == doctor_id)
            .delete(synchronize_session=False)
        )
