"""Service for creating, updating and moving bookings through their lifecycle."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import date

from sqlalchemy.orm import Session

from unispace.domain import lifecycle
from unispace.domain.errors import BookingConflictError, NotFoundError, ValidationError
from unispace.domain.models import (
    Availability,
    Booking,
    BookingCreate,
    BookingStatus,
    BookingUpdate,
    Reservation,
    Slot,
    TimeRange,
)
from unispace.repos.sql import (
    BookingRepository,
    FacilityRepository,
    UserRepository,
    to_booking,
    to_reservation,
)
from unispace.services.availability import compute_availability

logger = logging.getLogger(__name__)


class BookingService:
    """Booking operations over one request-scoped session.

    Writes lock the facility row before reading its reservations, so the
    fetch-check-insert sequence is serialised per facility within a single
    transaction. SQLite ignores ``SELECT ... FOR UPDATE``; there every
    transaction starts with ``BEGIN IMMEDIATE`` (see ``build_engine``).
    """

    def __init__(self, session: Session, slots: list[TimeRange] | None = None) -> None:
        self.bookings = BookingRepository(session)
        self.facilities = FacilityRepository(session)
        self.users = UserRepository(session)
        self._slots = slots

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def list_all(self) -> list[Booking]:
        return [to_booking(row) for row in self.bookings.list_all()]

    def get(self, booking_id: int) -> Booking:
        row = self.bookings.get(booking_id)
        if row is None:
            raise NotFoundError("Booking", booking_id)
        return to_booking(row)

    def history(self, user_id: int) -> list[Booking]:
        return [to_booking(row) for row in self.bookings.list_for_user(user_id)]

    def availability(self, facility_id: int, on_date: date) -> Availability:
        if self.facilities.get(facility_id) is None:
            raise NotFoundError("Facility", facility_id)

        existing = lifecycle.active_ranges(self.bookings.reservations_for_day(facility_id, on_date))
        day = compute_availability(existing, slots=self._slots)
        return Availability(
            facility_id=facility_id,
            date=on_date,
            available_slots=[Slot.from_range(r) for r in day.available],
            booked_slots=[Slot.from_range(r) for r in day.booked],
        )

    # ------------------------------------------------------------------
    # Create / full update (conflict-checked)
    # ------------------------------------------------------------------

    def create(self, payload: BookingCreate) -> Booking:
        self._require_facility(payload.facility_id)
        self._require_user(payload.user_id)

        candidate = Reservation(
            facility_id=payload.facility_id,
            user_id=payload.user_id,
            date=payload.date,
            start_time=payload.start_time,
            end_time=payload.end_time,
            status=payload.status,
        )
        self._propose(candidate)

        row = self.bookings.add(
            facility_id=candidate.facility_id,
            user_id=payload.user_id,
            on_date=candidate.date,
            start_time=candidate.start_time,
            end_time=candidate.end_time,
            status=candidate.status,
        )
        logger.info(
            "Booking %s created: facility=%s date=%s %s",
            row.id,
            row.facility_id,
            row.date,
            candidate.time_range,
        )
        return to_booking(row)

    def update(self, booking_id: int, payload: BookingUpdate) -> Booking:
        row = self.bookings.get(booking_id, lock=True)
        if row is None:
            raise NotFoundError("Booking", booking_id)

        current = to_reservation(row)
        changes = payload.model_dump(exclude_unset=True, exclude_none=True)
        merged = current.model_dump()
        merged.update(changes)
        if merged["end_time"] <= merged["start_time"]:
            raise ValidationError("end_time must be after start_time")
        candidate = Reservation(**merged)

        if candidate.status != current.status:
            lifecycle.check_transition(current.status, candidate.status)
        self._require_facility(candidate.facility_id)
        if candidate.user_id != current.user_id:
            self._require_user(candidate.user_id)

        self._propose(candidate, exclude_id=booking_id)

        row.facility_id = candidate.facility_id
        row.user_id = candidate.user_id
        row.date = candidate.date
        row.start_time = candidate.start_time
        row.end_time = candidate.end_time
        row.status = candidate.status
        self.bookings.save(row)
        logger.info("Booking %s updated: %s", booking_id, sorted(changes))
        return to_booking(row)

    # ------------------------------------------------------------------
    # Status-only transitions (never conflict-checked)
    # ------------------------------------------------------------------

    def set_status(self, booking_id: int, status: BookingStatus) -> Booking:
        return self._apply(booking_id, lambda r: lifecycle.transition(r, status))

    def cancel(self, booking_id: int) -> Booking:
        return self.set_status(booking_id, BookingStatus.CANCELLED)

    def approve(self, booking_id: int) -> Booking:
        return self._apply(booking_id, lifecycle.approve)

    def reject(self, booking_id: int) -> Booking:
        return self._apply(booking_id, lifecycle.reject)

    def delete(self, booking_id: int) -> Booking:
        """Permanently remove a booking row."""
        row = self.bookings.get(booking_id)
        if row is None:
            raise NotFoundError("Booking", booking_id)
        deleted = to_booking(row)
        self.bookings.delete(row)
        logger.info("Booking %s permanently deleted", booking_id)
        return deleted

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _apply(
        self, booking_id: int, change: Callable[[Reservation], Reservation]
    ) -> Booking:
        row = self.bookings.get(booking_id, lock=True)
        if row is None:
            raise NotFoundError("Booking", booking_id)
        updated = change(to_reservation(row))
        if updated.status != row.status:
            logger.info("Booking %s status %s -> %s", booking_id, row.status, updated.status)
            row.status = updated.status
            self.bookings.save(row)
        return to_booking(row)

    def _propose(self, candidate: Reservation, exclude_id: int | None = None) -> None:
        existing = lifecycle.active_ranges(
            self.bookings.reservations_for_day(candidate.facility_id, candidate.date),
            exclude_id=exclude_id,
        )
        try:
            lifecycle.propose_booking(candidate, existing)
        except BookingConflictError:
            logger.warning(
                "Booking conflict: facility=%s date=%s requested=%s",
                candidate.facility_id,
                candidate.date,
                candidate.time_range,
            )
            raise

    def _require_facility(self, facility_id: int) -> None:
        if self.facilities.get(facility_id, lock=True) is None:
            raise NotFoundError("Facility", facility_id)

    def _require_user(self, user_id: int | None) -> None:
        if user_id is None or self.users.get(user_id) is None:
            raise NotFoundError("User", user_id)
