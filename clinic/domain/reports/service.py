"""Report service - Daily activity and busiest doctors"""

from datetime import date, datetime

from sqlalchemy.orm import Session

from ..scheduling.availability import day_bounds
from .repository import ReportRepository
from .schemas import DailyAppointmentRow, TopDoctorRow


class ReportService:
    """Read-only reporting; never touches the appointment lifecycle"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = ReportRepository()

    def daily(self, day: date) -> list[DailyAppointmentRow]:
        start, end = day_bounds(day)
        return [
            DailyAppointmentRow(
                doctorName=row.doctor_name,
                appointmentTime=row.appointment_time,
                status=row.status,
                patientName=row.patient_name,
                patientPhone=row.patient_phone,
            )
            for row in self.repo.get_daily_rows(self.db, start, end)
        ]

    def top_by_month(self, month: int, year: int) -> list[TopDoctorRow]:
        if not 1 <= month <= 12:
            raise ValueError("Month must be between 1 and 12")
        start = datetime(year, month, 1)
        end = datetime(year + 1, 1, 1) if month == 12 else datetime(year, month + 1, 1)
        return self._top(start, end)

    def top_by_year(self, year: int) -> list[TopDoctorRow]:
        return self._top(datetime(year, 1, 1), datetime(year + 1, 1, 1))

    def _top(self, start: datetime, end: datetime) -> list[TopDoctorRow]:
        """Doctors tied for the most distinct patients in [start, end)"""
        rows = self.repo.get_patient_counts(self.db, start, end)
        if not rows:
            return []
        best = rows[0].patient_count
        return [
            TopDoctorRow(doctorId=r.doctor_id, doctorName=r.doctor_name, patientCount=r.patient_count)
            for r in rows
            if r.patient_count == best
        ]
