"""Scheduling domain schemas - Pydantic models for validation"""

from datetime import date as date_type
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, field_validator

from ...shared.validators import validate_local_datetime


class AppointmentCreate(BaseModel):
    """Schema for booking an appointment; the patient is the caller"""

    doctorId: int
    appointmentTime: datetime

    @field_validator("appointmentTime")
    @classmethod
    def validate_time(cls, v):
        return validate_local_datetime(v)


class AppointmentReschedule(BaseModel):
    """Schema for moving an appointment to a new start time"""

    appointmentTime: datetime

    @field_validator("appointmentTime")
    @classmethod
    def validate_time(cls, v):
        return validate_local_datetime(v)


class AppointmentRow(BaseModel):
    """Appointment joined with the doctor and patient fields shown in listings"""

    id: int
    doctorId: int
    doctorName: str
    patientId: int
    patientName: str
    patientEmail: str
    patientPhone: Optional[str] = None
    patientAddress: Optional[str] = None
    appointmentTime: datetime
    endTime: datetime
    status: str


class AppointmentListResponse(BaseModel):
    appointments: list[AppointmentRow]


class BookingResponse(BaseModel):
    message: str
    appointmentId: int


class AvailabilityResponse(BaseModel):
    doctorId: int
    date: date_type
    slots: list[str]
