"""Domain errors raised by services and mapped to HTTP responses at the boundary."""

from __future__ import annotations

from datetime import date, time
from typing import Any


class DomainError(Exception):
    """Base class for all expected, user-facing failures."""

    status_code = 500
    code = "internal_error"

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(message)


class ValidationError(DomainError):
    status_code = 400
    code = "validation_error"


class AuthenticationError(DomainError):
    status_code = 401
    code = "authentication_failed"


class NotFoundError(DomainError):
    status_code = 404
    code = "not_found"

    def __init__(self, resource: str, resource_id: Any = None) -> None:
        super().__init__(
            f"{resource} not found",
            details={"resource": resource, "id": resource_id},
        )


class ConflictError(DomainError):
    status_code = 409
    code = "conflict"


class InternalError(DomainError):
    status_code = 500
    code = "internal_error"


class BookingConflictError(ConflictError):
    """The requested range overlaps an active reservation for the facility/day."""

    code = "booking_conflict"

    def __init__(
        self, facility_id: int, on_date: date, start_time: time, end_time: time
    ) -> None:
        self.facility_id = facility_id
        self.date = on_date
        self.start_time = start_time
        self.end_time = end_time
        super().__init__(
            "Booking conflict: Facility is already booked for this time slot "
            f"(facility {facility_id}, {on_date.isoformat()} "
            f"{start_time.strftime('%H:%M')}-{end_time.strftime('%H:%M')})",
            details={
                "facility_id": facility_id,
                "date": on_date.isoformat(),
                "start_time": start_time.strftime("%H:%M"),
                "end_time": end_time.strftime("%H:%M"),
            },
        )


class DuplicateEmailError(ConflictError):
    code = "duplicate_email"

    def __init__(self, email: str) -> None:
        super().__init__("User with this email already exists", details={"email": email})


class InvalidStatusTransition(ValidationError):
    code = "invalid_status_transition"

    def __init__(self, current: str, target: str) -> None:
        self.current = current
        self.target = target
        super().__init__(
            f"Cannot change booking status from {current} to {target}",
            details={"current": current, "target": target},
        )
