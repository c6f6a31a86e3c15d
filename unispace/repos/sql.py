"""SQLAlchemy-backed repositories for users, facilities and bookings."""

from __future__ import annotations

from datetime import date, time
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.orm import Session, joinedload

from unispace.domain.models import (
    Booking,
    BookingStatus,
    Reservation,
    UserRole,
)
from unispace.repos.tables import BookingRow, FacilityRow, UserRow


class FacilityRepository:
    """Table-backed store for facilities."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def add(self, name: str, location: str, capacity: int) -> FacilityRow:
        row = FacilityRow(name=name, location=location, capacity=capacity)
        self._session.add(row)
        self._session.flush()
        return row

    def get(self, facility_id: int, lock: bool = False) -> FacilityRow | None:
        """Fetch one facility; ``lock`` takes a row lock for the transaction."""
        stmt = select(FacilityRow).where(FacilityRow.id == facility_id)
        if lock:
            stmt = stmt.with_for_update()
        return self._session.scalars(stmt).first()

    def list_all(self) -> list[FacilityRow]:
        return list(self._session.scalars(select(FacilityRow).order_by(FacilityRow.name)))

    def update(self, row: FacilityRow, fields: dict[str, Any]) -> FacilityRow:
        for key, value in fields.items():
            setattr(row, key, value)
        self._session.flush()
        return row

    def delete(self, row: FacilityRow) -> None:
        self._session.delete(row)
        self._session.flush()

    def count(self) -> int:
        return self._session.scalar(select(func.count()).select_from(FacilityRow)) or 0


class UserRepository:
    """Table-backed store for users."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def add(
        self,
        name: str,
        email: str,
        role: UserRole = UserRole.USER,
        password_hash: str | None = None,
    ) -> UserRow:
        row = UserRow(name=name, email=email, role=role, password_hash=password_hash)
        self._session.add(row)
        self._session.flush()
        return row

    def get(self, user_id: int) -> UserRow | None:
        return self._session.get(UserRow, user_id)

    def get_by_email(self, email: str) -> UserRow | None:
        return self._session.scalars(select(UserRow).where(UserRow.email == email)).first()

    def list_all(self) -> list[UserRow]:
        return list(self._session.scalars(select(UserRow).order_by(UserRow.name)))


class BookingRepository:
    """Table-backed store for bookings."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def add(
        self,
        facility_id: int,
        user_id: int,
        on_date: date,
        start_time: time,
        end_time: time,
        status: BookingStatus,
    ) -> BookingRow:
        row = BookingRow(
            facility_id=facility_id,
            user_id=user_id,
            date=on_date,
            start_time=start_time,
            end_time=end_time,
            status=status,
        )
        self._session.add(row)
        self._session.flush()
        return row

    def get(self, booking_id: int, lock: bool = False) -> BookingRow | None:
        """Fetch one booking; ``lock`` re-reads it under a row lock."""
        stmt = select(BookingRow).where(BookingRow.id == booking_id)
        if lock:
            stmt = stmt.with_for_update()
        else:
            stmt = stmt.options(joinedload(BookingRow.facility), joinedload(BookingRow.user))
        return self._session.scalars(stmt).first()

    def list_all(self) -> list[BookingRow]:
        stmt = (
            select(BookingRow)
            .options(joinedload(BookingRow.facility), joinedload(BookingRow.user))
            .order_by(BookingRow.date, BookingRow.start_time)
        )
        return list(self._session.scalars(stmt))

    def list_for_user(self, user_id: int) -> list[BookingRow]:
        """Return a user's bookings, most recent first."""
        stmt = (
            select(BookingRow)
            .options(joinedload(BookingRow.facility), joinedload(BookingRow.user))
            .where(BookingRow.user_id == user_id)
            .order_by(BookingRow.date.desc(), BookingRow.start_time.desc())
        )
        return list(self._session.scalars(stmt))

    def reservations_for_day(self, facility_id: int, on_date: date) -> list[Reservation]:
        """Return every reservation of one facility on one date, by start time."""
        stmt = (
            select(BookingRow)
            .where(BookingRow.facility_id == facility_id, BookingRow.date == on_date)
            .order_by(BookingRow.start_time)
        )
        return [to_reservation(row) for row in self._session.scalars(stmt)]

    def save(self, row: BookingRow) -> BookingRow:
        self._session.flush()
        self._session.refresh(row)
        return row

    def delete(self, row: BookingRow) -> None:
        self._session.delete(row)
        self._session.flush()


def to_reservation(row: BookingRow) -> Reservation:
    return Reservation(
        id=row.id,
        facility_id=row.facility_id,
        user_id=row.user_id,
        date=row.date,
        start_time=row.start_time,
        end_time=row.end_time,
        status=row.status,
    )


def to_booking(row: BookingRow) -> Booking:
    """Read model of a booking row, with facility and user names attached."""
    return Booking(
        id=row.id,
        facility_id=row.facility_id,
        user_id=row.user_id,
        date=row.date,
        start_time=row.start_time,
        end_time=row.end_time,
        status=row.status,
        created_at=row.created_at,
        facility_name=row.facility.name if row.facility else None,
        user_name=row.user.name if row.user else None,
        user_email=row.user.email if row.user else None,
    )


# ---------------------------------------------------------------------------
# Seed data – an admin account and the campus rooms
# ---------------------------------------------------------------------------

_SAMPLE_FACILITIES = [
    ("Computer Lab 101", "Building A, Floor 1", 30),
    ("Study Room 202", "Library, Floor 2", 15),
    ("Conference Hall 301", "Building B, Floor 3", 50),
    ("Lecture Hall 401", "Building C, Floor 1", 100),
    ("Science Lab 501", "Science Building, Floor 2", 25),
    ("Art Studio 601", "Arts Building, Floor 1", 20),
]


def seed_database(session: Session, admin_email: str, admin_password_hash: str) -> bool:
    """Insert the admin user and sample facilities when missing.

    Returns True if anything was written.
    """
    users = UserRepository(session)
    facilities = FacilityRepository(session)
    changed = False

    if users.get_by_email(admin_email) is None:
        users.add(
            name="Admin User",
            email=admin_email,
            role=UserRole.ADMIN,
            password_hash=admin_password_hash,
        )
        changed = True

    if facilities.count() == 0:
        for name, location, capacity in _SAMPLE_FACILITIES:
            facilities.add(name=name, location=location, capacity=capacity)
        changed = True

    return changed
