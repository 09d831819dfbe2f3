"""Report domain schemas"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class DailyAppointmentRow(BaseModel):
    doctorName: str
    appointmentTime: datetime
    status: str
    patientName: str
    patientPhone: Optional[str] = None


class DailyReportResponse(BaseModel):
    rows: list[DailyAppointmentRow]


class TopDoctorRow(BaseModel):
    doctorId: int
    doctorName: str
    patientCount: int


class TopDoctorResponse(BaseModel):
    rows: list[TopDoctorRow]
