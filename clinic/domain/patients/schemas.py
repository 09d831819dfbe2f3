"""Patient domain schemas - Pydantic models for validation"""

from typing import Optional

from pydantic import BaseModel, Field, field_validator

from ...shared.validators import validate_email, validate_phone
from ..scheduling.schemas import AppointmentRow


class PatientCreate(BaseModel):
    """Schema for patient sign-up"""

    name: str = Field(..., min_length=3, max_length=100)
    email: str
    password: str = Field(..., min_length=6)
    phone: str
    address: str = Field(..., max_length=255)

    @field_validator("email")
    @classmethod
    def check_email(cls, v):
        return validate_email(v)

    @field_validator("phone")
    @classmethod
    def check_phone(cls, v):
        return validate_phone(v)


class PatientResponse(BaseModel):
    id: int
    name: str
    email: str
    phone: Optional[str] = None
    address: Optional[str] = None


class PatientAppointmentsResponse(BaseModel):
    appointments: list[AppointmentRow]
