"""
Shared pytest fixtures: in-memory database, API client, record factories.
"""

import os
from datetime import datetime

# Ensure test environment before the app reads its configuration
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DB_LOG_SLOW_QUERIES", "false")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from clinic.database import Base, get_db  # noqa: E402
from clinic.main import app  # noqa: E402
from clinic.models import Appointment, AppointmentStatus, Doctor, Patient  # noqa: E402
from clinic.security_utils import create_access_token  # noqa: E402

# Fixed "current instant" for service-level tests
NOW = datetime(2030, 1, 1, 8, 0)


# ============================================================================
# DATABASE FIXTURES
# ============================================================================


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db_session(engine):
    """Fresh session on an empty database for each test"""
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(db_session):
    """FastAPI test client bound to the test session"""

    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


# ============================================================================
# FACTORIES
# ============================================================================


@pytest.fixture
def make_doctor(db_session):
    counter = {"n": 0}

    def factory(
        name="Dr. Frank Smith",
        specialty="Cardiology",
        available_times=("09:00-10:00", "10:00-11:00", "14:00-15:00"),
        email=None,
    ) -> Doctor:
        counter["n"] += 1
        doctor = Doctor(
            name=name,
            specialty=specialty,
            email=email or f"doctor{counter['n']}@clinic.test",
            phone="5550000000",
            available_times=list(available_times),
        )
        db_session.add(doctor)
        db_session.commit()
        db_session.refresh(doctor)
        return doctor

    return factory


@pytest.fixture
def make_patient(db_session):
    counter = {"n": 0}

    def factory(name="Jane Doe", email=None) -> Patient:
        counter["n"] += 1
        patient = Patient(
            name=name,
            email=email or f"patient{counter['n']}@mail.test",
            phone=f"555100{counter['n']:04d}",
            address="12 Main St",
        )
        db_session.add(patient)
        db_session.commit()
        db_session.refresh(patient)
        return patient

    return factory


@pytest.fixture
def make_appointment(db_session):
    def factory(doctor, patient, start, status=AppointmentStatus.SCHEDULED.value) -> Appointment:
        appointment = Appointment(
            doctor_id=doctor.id,
            patient_id=patient.id,
            appointment_time=start,
            status=status,
        )
        db_session.add(appointment)
        db_session.commit()
        db_session.refresh(appointment)
        return appointment

    return factory


def auth_header(email: str, role: str) -> dict:
    return {"Authorization": f"Bearer {create_access_token(email, role)}"}
