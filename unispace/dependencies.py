"""FastAPI dependencies wiring request-scoped services."""

from __future__ import annotations

from datetime import timedelta

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from unispace.config import Settings
from unispace.repos.database import get_session
from unispace.services.auth import PasswordHasher
from unispace.services.bookings import BookingService
from unispace.services.facilities import FacilityService
from unispace.services.slots import generate_slots
from unispace.services.users import UserService


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_password_hasher(request: Request) -> PasswordHasher:
    return request.app.state.password_hasher


def get_booking_service(
    session: Session = Depends(get_session),
    settings: Settings = Depends(get_app_settings),
) -> BookingService:
    slots = generate_slots(
        settings.opening_time,
        settings.closing_time,
        timedelta(minutes=settings.slot_minutes),
    )
    return BookingService(session, slots=slots)


def get_facility_service(session: Session = Depends(get_session)) -> FacilityService:
    return FacilityService(session)


def get_user_service(
    session: Session = Depends(get_session),
    hasher: PasswordHasher = Depends(get_password_hasher),
) -> UserService:
    return UserService(session, hasher)
