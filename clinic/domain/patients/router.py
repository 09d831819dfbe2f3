"""Patient router - FastAPI endpoints for patient operations"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from ...auth import Identity, get_current_patient, require_role
from ...database import get_db
from ...models import Patient
from ..doctors.filters import is_no_filter
from .schemas import PatientAppointmentsResponse, PatientCreate, PatientResponse
from .service import PatientService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/patients", tags=["Patients"])


def get_patient_service(db: Session = Depends(get_db)) -> PatientService:
    """Dependency injection for PatientService"""
    return PatientService(db)


def to_patient_response(patient: Patient) -> PatientResponse:
    return PatientResponse(
        id=patient.id,
        name=patient.name,
        email=patient.email,
        phone=patient.phone,
        address=patient.address,
    )


@router.post("", status_code=201)
async def create_patient(
    data: PatientCreate,
    service: PatientService = Depends(get_patient_service),
):
    """Public sign-up"""
    patient = service.create_patient(data)
    return {"message": "Signup successful", "patientId": patient.id}


@router.get("/me", response_model=PatientResponse)
async def get_patient_details(patient: Patient = Depends(get_current_patient)):
    """Profile of the calling patient"""
    return to_patient_response(patient)


@router.get("/me/appointments/filter", response_model=PatientAppointmentsResponse)
async def filter_patient_appointments(
    condition: Optional[str] = Query(None, description="past or future"),
    doctor_name: Optional[str] = Query(None, description="Doctor name substring"),
    patient: Patient = Depends(get_current_patient),
    service: PatientService = Depends(get_patient_service),
):
    """The caller's appointments filtered by condition and doctor name"""
    condition = None if is_no_filter(condition) else condition
    doctor_name = None if is_no_filter(doctor_name) else doctor_name.strip()
    try:
        rows = service.filter_appointments(patient.id, condition, doctor_name)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    return PatientAppointmentsResponse(appointments=rows)


@router.get("/{patient_id}/appointments", response_model=PatientAppointmentsResponse)
async def get_patient_appointments(
    patient_id: int,
    identity: Identity = Depends(require_role("patient", "doctor")),
    service: PatientService = Depends(get_patient_service),
):
    """A patient's appointments; patients may only read their own"""
    owner_email = identity.email if identity.role == "patient" else None
    rows = service.get_appointments(patient_id, owner_email)
    return PatientAppointmentsResponse(appointments=rows)


__all__ = [
    "router",
    "create_patient",
    "get_patient_details",
    "filter_patient_appointments",
    "get_patient_appointments",
]
