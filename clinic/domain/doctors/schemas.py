"""Doctor domain schemas - Pydantic models for validation"""

from typing import Optional

from pydantic import BaseModel, Field, field_validator

from ...shared.validators import validate_available_times, validate_email, validate_phone


class DoctorCreate(BaseModel):
    """Schema for creating a doctor account"""

    name: str = Field(..., min_length=3, max_length=100)
    specialty: str = Field(..., min_length=3, max_length=50)
    email: str
    password: str = Field(..., min_length=6)
    phone: Optional[str] = None
    availableTimes: list[str] = Field(default_factory=list)

    @field_validator("email")
    @classmethod
    def check_email(cls, v):
        return validate_email(v)

    @field_validator("phone")
    @classmethod
    def check_phone(cls, v):
        return validate_phone(v)

    @field_validator("availableTimes")
    @classmethod
    def check_available_times(cls, v):
        return validate_available_times(v)


class DoctorUpdate(BaseModel):
    """Schema for updating a doctor; omitted fields are left unchanged"""

    name: Optional[str] = Field(None, min_length=3, max_length=100)
    specialty: Optional[str] = Field(None, min_length=3, max_length=50)
    email: Optional[str] = None
    phone: Optional[str] = None
    availableTimes: Optional[list[str]] = None

    @field_validator("email")
    @classmethod
    def check_email(cls, v):
        return validate_email(v)

    @field_validator("phone")
    @classmethod
    def check_phone(cls, v):
        return validate_phone(v)

    @field_validator("availableTimes")
    @classmethod
    def check_available_times(cls, v):
        return validate_available_times(v)


class DoctorResponse(BaseModel):
    """Schema for doctor response"""

    id: int
    name: str
    specialty: str
    email: str
    phone: Optional[str] = None
    availableTimes: list[str]


class DoctorListResponse(BaseModel):
    doctors: list[DoctorResponse]
