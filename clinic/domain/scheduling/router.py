"""Appointment router - FastAPI endpoints for the appointment lifecycle"""

import logging
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...auth import get_current_doctor, get_current_patient
from ...database import get_db
from ...models import Doctor, Patient
from ..doctors.filters import is_no_filter
from .schemas import (
    AppointmentCreate,
    AppointmentListResponse,
    AppointmentReschedule,
    BookingResponse,
)
from .service import AppointmentService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/appointments", tags=["Appointments"])


def get_appointment_service(db: Session = Depends(get_db)) -> AppointmentService:
    """Dependency injection for AppointmentService"""
    return AppointmentService(db)


def _name_filter(value: Optional[str]) -> Optional[str]:
    return None if is_no_filter(value) else value.strip()


# ============================================================================
# PATIENT OPERATIONS
# ============================================================================


@router.post("", response_model=BookingResponse, status_code=201)
async def book_appointment(
    data: AppointmentCreate,
    patient: Patient = Depends(get_current_patient),
    service: AppointmentService = Depends(get_appointment_service),
):
    """Book a one-hour appointment for the calling patient"""
    appointment = service.book(data.doctorId, patient.id, data.appointmentTime)
    return BookingResponse(message="Appointment Booked Successfully", appointmentId=appointment.id)


@router.put("/{appointment_id}")
async def reschedule_appointment(
    appointment_id: int,
    data: AppointmentReschedule,
    patient: Patient = Depends(get_current_patient),
    service: AppointmentService = Depends(get_appointment_service),
):
    """Move one of the caller's appointments to a new start time"""
    service.reschedule(appointment_id, patient.id, data.appointmentTime)
    return {"message": "Appointment Updated Successfully"}


@router.delete("/{appointment_id}")
async def cancel_appointment(
    appointment_id: int,
    patient: Patient = Depends(get_current_patient),
    service: AppointmentService = Depends(get_appointment_service),
):
    """Cancel (delete) one of the caller's appointments"""
    service.cancel(appointment_id, patient.email)
    return {"message": "Appointment Deleted Successfully"}


# ============================================================================
# DOCTOR OPERATIONS
# ============================================================================


@router.get("", response_model=AppointmentListResponse)
async def get_appointments_for_date(
    date: date = Query(..., description="YYYY-MM-DD"),
    patient_name: Optional[str] = Query(None, description="Patient name substring"),
    doctor: Doctor = Depends(get_current_doctor),
    service: AppointmentService = Depends(get_appointment_service),
):
    """The calling doctor's appointments on a date"""
    rows = service.list_for_date(doctor.id, date, _name_filter(patient_name))
    return AppointmentListResponse(appointments=rows)


@router.get("/upcoming", response_model=AppointmentListResponse)
async def get_upcoming_appointments(
    patient_name: Optional[str] = Query(None, description="Patient name substring"),
    doctor: Doctor = Depends(get_current_doctor),
    service: AppointmentService = Depends(get_appointment_service),
):
    """The calling doctor's future appointments, earliest first"""
    rows = service.upcoming(doctor.id, patient_name=_name_filter(patient_name))
    return AppointmentListResponse(appointments=rows)


@router.patch("/{appointment_id}/complete")
async def complete_appointment(
    appointment_id: int,
    _doctor: Doctor = Depends(get_current_doctor),
    service: AppointmentService = Depends(get_appointment_service),
):
    """Mark an appointment as completed after the visit"""
    service.complete(appointment_id)
    return {"message": "Appointment marked as completed"}


__all__ = [
    "router",
    "book_appointment",
    "reschedule_appointment",
    "cancel_appointment",
    "get_appointments_for_date",
    "get_upcoming_appointments",
    "complete_appointment",
]
