"""Doctor router - FastAPI endpoints for doctor operations"""

import logging
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from ...auth import Identity, get_identity, require_role
from ...database import get_db
from ...models import Doctor
from ..scheduling.schemas import AvailabilityResponse
from .filters import TimeOfDay
from .schemas import DoctorCreate, DoctorListResponse, DoctorResponse, DoctorUpdate
from .service import DoctorService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/doctors", tags=["Doctors"])


def get_doctor_service(db: Session = Depends(get_db)) -> DoctorService:
    """Dependency injection for DoctorService"""
    return DoctorService(db)


def to_doctor_response(doctor: Doctor) -> DoctorResponse:
    return DoctorResponse(
        id=doctor.id,
        name=doctor.name,
        specialty=doctor.specialty,
        email=doctor.email,
        phone=doctor.phone,
        availableTimes=list(doctor.available_times or []),
    )


# ============================================================================
# PUBLIC ROUTES
# ============================================================================


@router.get("", response_model=DoctorListResponse)
async def get_doctors(service: DoctorService = Depends(get_doctor_service)):
    """All doctors, ordered by ID"""
    return DoctorListResponse(doctors=[to_doctor_response(d) for d in service.get_doctors()])


@router.get("/filter", response_model=DoctorListResponse)
async def filter_doctors(
    name: Optional[str] = Query(None, description="Name substring, 'null' for any"),
    specialty: Optional[str] = Query(None, description="Specialty, 'null' for any"),
    time: Optional[str] = Query(None, description="AM or PM, 'null' for any"),
    service: DoctorService = Depends(get_doctor_service),
):
    """Search doctors by name, specialty and morning/afternoon availability"""
    try:
        time_of_day = TimeOfDay.parse(time)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e

    doctors = service.filter_doctors(name, specialty, time_of_day)
    return DoctorListResponse(doctors=[to_doctor_response(d) for d in doctors])


# ============================================================================
# AUTHENTICATED ROUTES
# ============================================================================


@router.get("/{doctor_id}/availability", response_model=AvailabilityResponse)
async def get_doctor_availability(
    doctor_id: int,
    date: date = Query(..., description="YYYY-MM-DD"),
    _identity: Identity = Depends(get_identity),
    service: DoctorService = Depends(get_doctor_service),
):
    """Free one-hour slots for a doctor on a date"""
    slots = service.get_availability(doctor_id, date)
    return AvailabilityResponse(doctorId=doctor_id, date=date, slots=slots)


# ============================================================================
# ADMIN ROUTES
# ============================================================================


@router.post("", response_model=DoctorResponse, status_code=201)
async def create_doctor(
    data: DoctorCreate,
    _admin: Identity = Depends(require_role("admin")),
    service: DoctorService = Depends(get_doctor_service),
):
    """Create a doctor account"""
    return to_doctor_response(service.create_doctor(data))


@router.patch("/{doctor_id}", response_model=DoctorResponse)
async def update_doctor(
    doctor_id: int,
    data: DoctorUpdate,
    _admin: Identity = Depends(require_role("admin")),
    service: DoctorService = Depends(get_doctor_service),
):
    """Update a doctor"""
    return to_doctor_response(service.update_doctor(doctor_id, data))


@router.delete("/{doctor_id}")
async def delete_doctor(
    doctor_id: int,
    _admin: Identity = Depends(require_role("admin")),
    service: DoctorService = Depends(get_doctor_service),
):
    """Delete a doctor and the doctor's appointments"""
    return service.delete_doctor(doctor_id)


__all__ = [
    "router",
    "get_doctors",
    "filter_doctors",
    "get_doctor_availability",
    "create_doctor",
    "update_doctor",
    "delete_doctor",
]
