import logging
from dataclasses import dataclass

from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from .database import get_db
from .domain.doctors.repository import DoctorRepository
from .domain.patients.repository import PatientRepository
from .models import Doctor, Patient
from .security_utils import verify_access_token

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)

ROLES = ("admin", "doctor", "patient")


@dataclass(frozen=True)
class Identity:
    """Authenticated caller: an email and the role it is entitled to"""

    email: str
    role: str


async def get_identity(
    credentials: HTTPAuthorizationCredentials = Depends(security),
) -> Identity:
    """Resolve the caller from the Bearer token"""
    if credentials is None or credentials.scheme.lower() != "bearer":
        logger.error("❌ No credentials provided")
        raise HTTPException(
            status_code=401,
            detail="Not authenticated. Please provide a valid Bearer token in the Authorization header.",
        )

    payload = verify_access_token(credentials.credentials)
    if payload is None:
        raise HTTPException(status_code=401, detail="Invalid or expired token")

    email = payload.get("sub")
    role = payload.get("role")
    if not email or role not in ROLES:
        logger.error(f"❌ Token missing claims. Available claims: {list(payload.keys())}")
        raise HTTPException(status_code=401, detail="Invalid token claims")

    logger.debug(f"✅ Caller authenticated: {email} ({role})")
    return Identity(email=email, role=role)


def require_role(*roles: str):
    """Dependency factory: the caller must hold one of ``roles``"""

    async def dependency(identity: Identity = Depends(get_identity)) -> Identity:
        if identity.role not in roles:
            logger.warning(f"⚠️ {identity.email} ({identity.role}) denied; requires {roles}")
            raise HTTPException(status_code=403, detail="Not allowed for this role")
        return identity

    return dependency


async def get_current_doctor(
    identity: Identity = Depends(require_role("doctor")),
    db: Session = Depends(get_db),
) -> Doctor:
    """Doctor record for the calling doctor"""
    doctor = DoctorRepository.get_doctor_by_email(db, identity.email)
    if not doctor:
        logger.error(f"❌ No doctor record for {identity.email}")
        raise HTTPException(status_code=403, detail="Doctor account not found")
    return doctor


async def get_current_patient(
    identity: Identity = Depends(require_role("patient")),
    db: Session = Depends(get_db),
) -> Patient:
    """Patient record for the calling patient"""
    patient = PatientRepository.get_patient_by_email(db, identity.email)
    if not patient:
        logger.error(f"❌ No patient record for {identity.email}")
        raise HTTPException(status_code=403, detail="Patient account not found")
    return patient
