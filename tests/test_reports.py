from datetime import date, datetime

import pytest

from clinic.domain.reports.service import ReportService


def test_daily_report_rows(db_session, make_doctor, make_patient, make_appointment):
    doctor = make_doctor(name="Dr. Adams")
    patient = make_patient(name="Jane Doe")
    make_appointment(doctor, patient, datetime(2030, 1, 2, 9, 0))
    make_appointment(doctor, patient, datetime(2030, 1, 3, 9, 0))

    rows = ReportService(db_session).daily(date(2030, 1, 2))

    assert len(rows) == 1
    assert rows[0].doctorName == "Dr. Adams"
    assert rows[0].patientName == "Jane Doe"


def test_top_doctor_counts_distinct_patients(
    db_session, make_doctor, make_patient, make_appointment
):
    busy, quiet = make_doctor(name="Dr. Busy"), make_doctor(name="Dr. Quiet")
    p1, p2 = make_patient(), make_patient()
    make_appointment(busy, p1, datetime(2030, 3, 1, 9, 0))
    make_appointment(busy, p2, datetime(2030, 3, 2, 9, 0))
    # Repeat visits of one patient count once
    make_appointment(quiet, p1, datetime(2030, 3, 1, 9, 0))
    make_appointment(quiet, p1, datetime(2030, 3, 2, 9, 0))
    make_appointment(quiet, p1, datetime(2030, 3, 3, 9, 0))

    rows = ReportService(db_session).top_by_month(3, 2030)

    assert [(r.doctorName, r.patientCount) for r in rows] == [("Dr. Busy", 2)]


def test_top_doctor_keeps_ties(db_session, make_doctor, make_patient, make_appointment):
    first, second = make_doctor(), make_doctor()
    make_appointment(first, make_patient(), datetime(2030, 5, 1, 9, 0))
    make_appointment(second, make_patient(), datetime(2030, 5, 1, 9, 0))

    rows = ReportService(db_session).top_by_year(2030)

    assert [r.doctorId for r in rows] == [first.id, second.id]


def test_top_doctor_month_window_is_exclusive(
    db_session, make_doctor, make_patient, make_appointment
):
    make_appointment(make_doctor(), make_patient(), datetime(2030, 2, 1, 0, 0))

    assert ReportService(db_session).top_by_month(1, 2030) == []
    assert ReportService(db_session).top_by_month(12, 2029) == []


def test_top_doctor_invalid_month(db_session):
    with pytest.raises(ValueError):
        ReportService(db_session).top_by_month(13, 2030)
