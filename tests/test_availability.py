from datetime import date, datetime

import pytest
from sqlalchemy.exc import OperationalError

from clinic.domain.scheduling.availability import AvailabilityResolver, subtract_booked
from clinic.domain.scheduling.exceptions import StorageFailure, UnknownDoctor

DAY = date(2030, 1, 2)


def test_subtract_booked_keeps_declared_order():
    declared = ["14:00-15:00", "09:00-10:00", "10:00-11:00"]
    booked = [datetime(2030, 1, 2, 9, 0)]
    assert subtract_booked(declared, booked) == ["14:00-15:00", "10:00-11:00"]


def test_no_appointments_returns_declared(db_session, make_doctor):
    doctor = make_doctor()
    assert AvailabilityResolver(db_session).free_slots(doctor.id, DAY) == [
        "09:00-10:00",
        "10:00-11:00",
        "14:00-15:00",
    ]


def test_exact_start_consumes_slot(db_session, make_doctor, make_patient, make_appointment):
    doctor = make_doctor()
    make_appointment(doctor, make_patient(), datetime(2030, 1, 2, 10, 0))

    assert AvailabilityResolver(db_session).free_slots(doctor.id, DAY) == [
        "09:00-10:00",
        "14:00-15:00",
    ]


def test_unaligned_start_leaves_overlapping_slot_free(
    db_session, make_doctor, make_patient, make_appointment
):
    doctor = make_doctor()
    make_appointment(doctor, make_patient(), datetime(2030, 1, 2, 9, 15))

    assert "09:00-10:00" in AvailabilityResolver(db_session).free_slots(doctor.id, DAY)


def test_other_days_do_not_consume(db_session, make_doctor, make_patient, make_appointment):
    doctor = make_doctor()
    make_appointment(doctor, make_patient(), datetime(2030, 1, 3, 9, 0))

    assert "09:00-10:00" in AvailabilityResolver(db_session).free_slots(doctor.id, DAY)


def test_unknown_doctor(db_session):
    with pytest.raises(UnknownDoctor) as exc:
        AvailabilityResolver(db_session).free_slots(999, DAY)
    assert exc.value.status_code == 404


def test_excluded_appointment_keeps_its_slot(
    db_session, make_doctor, make_patient, make_appointment
):
    doctor = make_doctor()
    appointment = make_appointment(doctor, make_patient(), datetime(2030, 1, 2, 9, 0))
    resolver = AvailabilityResolver(db_session)

    assert not resolver.is_free(doctor, datetime(2030, 1, 2, 9, 0))
    assert resolver.is_free(doctor, datetime(2030, 1, 2, 9, 0), exclude_appointment_id=appointment.id)


def test_read_failure_is_storage_failure(db_session, monkeypatch, make_doctor):
    doctor = make_doctor()
    resolver = AvailabilityResolver(db_session)

    def storage_down(*args, **kwargs):
        raise OperationalError("SELECT 1", {}, Exception("disk I/O error"))

    monkeypatch.setattr(resolver.repo, "get_doctor_appointments_between", storage_down)

    with pytest.raises(StorageFailure):
        resolver.free_slots(doctor.id, DAY)
