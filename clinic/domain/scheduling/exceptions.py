"""Scheduling errors - typed failures returned to the transport layer"""

from typing import Optional


class SchedulingError(Exception):
    """Base class; carries the HTTP status the router maps it to"""

    status_code = 400
    detail = "Scheduling request rejected"

    def __init__(self, detail: Optional[str] = None, status_code: Optional[int] = None):
        self.detail = detail or self.detail
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.detail)


class UnknownDoctor(SchedulingError):
    status_code = 400
    detail = "Invalid doctor id"


class UnknownAppointment(SchedulingError):
    status_code = 404
    detail = "No appointment found"


class UnknownPatient(SchedulingError):
    status_code = 404
    detail = "Patient not found"


class OwnershipMismatch(SchedulingError):
    status_code = 400
    detail = "Patient Id mismatch"


class SlotUnavailable(SchedulingError):
    status_code = 409
    detail = "Appointment already booked for given time or Doctor not available"


class DuplicateAccount(SchedulingError):
    status_code = 409
    detail = "Account already exists"


class StorageFailure(SchedulingError):
    status_code = 500
    detail = "Internal Server Error"


class MalformedSlot(ValueError):
    """A declared availability string is not HH:MM-HH:MM.

    Never surfaced over HTTP: consumers skip the entry and continue.
    """
