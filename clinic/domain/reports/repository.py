"""Report repository - Read-only aggregate queries"""

from datetime import datetime

from sqlalchemy import func
from sqlalchemy.orm import Session

from ...models import Appointment, Doctor, Patient


class ReportRepository:
    """Repository for reporting queries"""

    @staticmethod
    def get_daily_rows(db: Session, start: datetime, end: datetime) -> list:
        """Appointments in [start, end] with doctor and patient fields"""
        return (
            db.query(
                Doctor.name.label("doctor_name"),
                Appointment.appointment_time,
                Appointment.status,
                Patient.name.label("patient_name"),
                Patient.phone.label("patient_phone"),
            )
            .join(Doctor, Appointment.doctor_id == Doctor.id)
            .join(Patient, Appointment.patient_id == Patient.id)
            .filter(Appointment.appointment_time >= start, Appointment.appointment_time <= end)
            .order_by(Doctor.name.asc(), Appointment.appointment_time.asc())
            .all()
        )

    @staticmethod
    def get_patient_counts(db: Session, start: datetime, end: datetime) -> list:
        """Distinct patients per doctor for appointments in [start, end), busiest first"""
        patient_count = func.count(func.distinct(Appointment.patient_id))
        return (
            db.query(
                Doctor.id.label("doctor_id"),
                Doctor.name.label("doctor_name"),
                patient_count.label("patient_count"),
            )
            .join(Doctor, Appointment.doctor_id == Doctor.id)
            .filter(Appointment.appointment_time >= start, Appointment.appointment_time < end)
            .group_by(Doctor.id, Doctor.name)
            .order_by(patient_count.desc(), Doctor.id.asc())
            .all()
        )
