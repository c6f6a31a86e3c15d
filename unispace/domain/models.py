"""Domain models for the facility booking system."""

from __future__ import annotations

import datetime as dt
import re
from datetime import datetime, time
from enum import StrEnum
from typing import Annotated, Generic, TypeVar

from pydantic import (
    BaseModel,
    BeforeValidator,
    ConfigDict,
    EmailStr,
    Field,
    PlainSerializer,
    model_validator,
)

_CLOCK_RE = re.compile(r"^([01]?[0-9]|2[0-3]):([0-5][0-9])$")


class BookingStatus(StrEnum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"


class UserRole(StrEnum):
    USER = "user"
    ADMIN = "admin"


def _parse_clock(value: object) -> object:
    """Accept ``H:MM`` / ``HH:MM`` strings; pass ``time`` objects through."""
    if isinstance(value, str):
        match = _CLOCK_RE.match(value.strip())
        if match is None:
            raise ValueError("time must be in HH:MM format")
        return time(int(match.group(1)), int(match.group(2)))
    return value


def format_clock(value: time) -> str:
    return value.strftime("%H:%M")


# Wall-clock time transmitted as a 24-hour ``HH:MM`` string.
ClockTime = Annotated[
    time,
    BeforeValidator(_parse_clock),
    PlainSerializer(format_clock, return_type=str, when_used="json"),
]


# ---------------------------------------------------------------------------
# Core scheduling values
# ---------------------------------------------------------------------------


class TimeRange(BaseModel):
    """Half-open time-of-day range ``[start, end)``."""

    model_config = ConfigDict(frozen=True)

    start: ClockTime
    end: ClockTime

    @model_validator(mode="after")
    def _end_after_start(self) -> TimeRange:
        if self.end <= self.start:
            raise ValueError("end must be after start")
        return self

    def __str__(self) -> str:
        return f"{format_clock(self.start)}-{format_clock(self.end)}"


class Slot(BaseModel):
    start_time: ClockTime
    end_time: ClockTime

    @classmethod
    def from_range(cls, time_range: TimeRange) -> Slot:
        return cls(start_time=time_range.start, end_time=time_range.end)


class Reservation(BaseModel):
    """Snapshot of a booking as seen by the lifecycle gate."""

    id: int | None = None
    facility_id: int
    user_id: int | None = None
    date: dt.date
    start_time: ClockTime
    end_time: ClockTime
    status: BookingStatus = BookingStatus.CONFIRMED

    @model_validator(mode="after")
    def _end_after_start(self) -> Reservation:
        if self.end_time <= self.start_time:
            raise ValueError("end_time must be after start_time")
        return self

    @property
    def time_range(self) -> TimeRange:
        return TimeRange(start=self.start_time, end=self.end_time)

    @property
    def is_active(self) -> bool:
        return self.status != BookingStatus.CANCELLED


# ---------------------------------------------------------------------------
# Stored entities (read models)
# ---------------------------------------------------------------------------


class Facility(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    location: str
    capacity: int
    created_at: datetime | None = None


class User(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    role: UserRole


class Booking(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    facility_id: int
    user_id: int
    date: dt.date
    start_time: ClockTime
    end_time: ClockTime
    status: BookingStatus
    created_at: datetime | None = None
    facility_name: str | None = None
    user_name: str | None = None
    user_email: str | None = None


class Availability(BaseModel):
    facility_id: int
    date: dt.date
    available_slots: list[Slot] = Field(default_factory=list)
    booked_slots: list[Slot] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Request / Response DTOs
# ---------------------------------------------------------------------------


NonEmptyStr = Annotated[str, Field(min_length=1)]


class FacilityCreate(BaseModel):
    name: NonEmptyStr
    location: NonEmptyStr
    capacity: int = Field(ge=1)


class FacilityUpdate(BaseModel):
    name: NonEmptyStr | None = None
    location: NonEmptyStr | None = None
    capacity: int | None = Field(default=None, ge=1)


class UserCreate(BaseModel):
    name: NonEmptyStr
    email: EmailStr
    role: UserRole = UserRole.USER


class RegisterRequest(UserCreate):
    password: str = Field(min_length=6)


class LoginRequest(BaseModel):
    email: EmailStr
    password: NonEmptyStr


class AuthenticateRequest(BaseModel):
    email: EmailStr
    password: str | None = None
    role: UserRole = UserRole.USER


class BookingCreate(BaseModel):
    facility_id: int = Field(ge=1)
    user_id: int = Field(ge=1)
    date: dt.date
    start_time: ClockTime
    end_time: ClockTime
    status: BookingStatus = BookingStatus.CONFIRMED

    @model_validator(mode="after")
    def _end_after_start(self) -> BookingCreate:
        if self.end_time <= self.start_time:
            raise ValueError("end_time must be after start_time")
        return self


class BookingUpdate(BaseModel):
    facility_id: int | None = Field(default=None, ge=1)
    user_id: int | None = Field(default=None, ge=1)
    date: dt.date | None = None
    start_time: ClockTime | None = None
    end_time: ClockTime | None = None
    status: BookingStatus | None = None


class StatusUpdate(BaseModel):
    status: BookingStatus


T = TypeVar("T")


class Envelope(BaseModel, Generic[T]):
    """Success envelope shared by every endpoint."""

    success: bool = True
    data: T
    message: str


class ErrorEnvelope(BaseModel):
    success: bool = False
    message: str
    error: str | None = None
    errors: list[dict] | None = None
