"""Booking lifecycle gate: conflict check on create/update and status transitions.

Everything here is pure. Callers fetch the active reservations for the
facility and date inside the same transaction that persists the result.
"""

from __future__ import annotations

from collections.abc import Iterable

from unispace.domain.errors import BookingConflictError, InvalidStatusTransition
from unispace.domain.models import BookingStatus, Reservation, TimeRange
from unispace.services.conflicts import has_conflict

_TRANSITIONS: dict[BookingStatus, frozenset[BookingStatus]] = {
    BookingStatus.PENDING: frozenset({BookingStatus.CONFIRMED, BookingStatus.CANCELLED}),
    BookingStatus.CONFIRMED: frozenset({BookingStatus.CANCELLED}),
    BookingStatus.CANCELLED: frozenset(),
}


def active_ranges(
    reservations: Iterable[Reservation], exclude_id: int | None = None
) -> list[TimeRange]:
    """Time ranges of non-cancelled reservations, minus the row being updated."""
    return [
        r.time_range
        for r in reservations
        if r.is_active and (exclude_id is None or r.id != exclude_id)
    ]


def propose_booking(candidate: Reservation, existing: Iterable[TimeRange]) -> Reservation:
    """Return *candidate* unchanged if it can be persisted.

    Raises ``BookingConflictError`` when the candidate's range overlaps any of
    *existing*. A cancelled candidate occupies no time and is never rejected.
    """
    if candidate.is_active and has_conflict(candidate.time_range, existing):
        raise BookingConflictError(
            facility_id=candidate.facility_id,
            on_date=candidate.date,
            start_time=candidate.start_time,
            end_time=candidate.end_time,
        )
    return candidate


def check_transition(current: BookingStatus, target: BookingStatus) -> None:
    """Validate a status change.

    Re-applying the current status is a no-op, so cancelling twice succeeds.
    Nothing leaves ``cancelled``.
    """
    if current == target:
        return
    if target not in _TRANSITIONS[current]:
        raise InvalidStatusTransition(current.value, target.value)


def transition(reservation: Reservation, target: BookingStatus) -> Reservation:
    """Apply a status-only change. Time ranges are not re-validated."""
    check_transition(reservation.status, target)
    return reservation.model_copy(update={"status": target})


def approve(reservation: Reservation) -> Reservation:
    if reservation.status != BookingStatus.PENDING:
        raise InvalidStatusTransition(reservation.status.value, BookingStatus.CONFIRMED.value)
    return transition(reservation, BookingStatus.CONFIRMED)


def reject(reservation: Reservation) -> Reservation:
    if reservation.status != BookingStatus.PENDING:
        raise InvalidStatusTransition(reservation.status.value, BookingStatus.CANCELLED.value)
    return transition(reservation, BookingStatus.CANCELLED)
