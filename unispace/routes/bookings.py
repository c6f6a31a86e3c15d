"""Booking routes: reservations, availability and status changes."""

from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends, Query, status

from unispace.dependencies import get_booking_service
from unispace.domain.models import (
    Availability,
    Booking,
    BookingCreate,
    BookingUpdate,
    Envelope,
    StatusUpdate,
)
from unispace.services.bookings import BookingService

router = APIRouter(prefix="/api/bookings", tags=["bookings"])


# Fixed paths first so they are not captured by /{booking_id}.


@router.get("/availability/check", response_model=Envelope[Availability])
def check_availability(
    facility_id: int = Query(ge=1),
    on_date: date = Query(alias="date"),
    service: BookingService = Depends(get_booking_service),
) -> dict:
    """Free 30-minute slots plus the booked ranges for one facility and day."""
    return {
        "data": service.availability(facility_id, on_date),
        "message": "Availability retrieved successfully",
    }


@router.get("/user/history", response_model=Envelope[list[Booking]])
def user_history(
    user_id: int = Query(ge=1),
    service: BookingService = Depends(get_booking_service),
) -> dict:
    return {"data": service.history(user_id), "message": "User bookings retrieved successfully"}


@router.get("", response_model=Envelope[list[Booking]])
def list_bookings(service: BookingService = Depends(get_booking_service)) -> dict:
    return {"data": service.list_all(), "message": "Bookings retrieved successfully"}


@router.get("/{booking_id}", response_model=Envelope[Booking])
def get_booking(booking_id: int, service: BookingService = Depends(get_booking_service)) -> dict:
    return {"data": service.get(booking_id), "message": "Booking retrieved successfully"}


@router.post("", response_model=Envelope[Booking], status_code=status.HTTP_201_CREATED)
def create_booking(
    payload: BookingCreate, service: BookingService = Depends(get_booking_service)
) -> dict:
    """Reserve a slot; 409 if it overlaps an active booking."""
    return {"data": service.create(payload), "message": "Booking created successfully"}


@router.put("/{booking_id}", response_model=Envelope[Booking])
def update_booking(
    booking_id: int,
    payload: BookingUpdate,
    service: BookingService = Depends(get_booking_service),
) -> dict:
    return {
        "data": service.update(booking_id, payload),
        "message": "Booking updated successfully",
    }


@router.delete("/{booking_id}", response_model=Envelope[Booking])
def cancel_booking(
    booking_id: int, service: BookingService = Depends(get_booking_service)
) -> dict:
    """Soft delete: mark the booking cancelled and free its slot."""
    return {"data": service.cancel(booking_id), "message": "Booking cancelled successfully"}


@router.delete("/{booking_id}/permanent", response_model=Envelope[Booking])
def delete_booking(
    booking_id: int, service: BookingService = Depends(get_booking_service)
) -> dict:
    return {"data": service.delete(booking_id), "message": "Booking deleted successfully"}


@router.patch("/{booking_id}/status", response_model=Envelope[Booking])
def patch_booking_status(
    booking_id: int,
    body: StatusUpdate,
    service: BookingService = Depends(get_booking_service),
) -> dict:
    booking = service.set_status(booking_id, body.status)
    return {"data": booking, "message": f"Booking {body.status} successfully"}


@router.post("/{booking_id}/approve", response_model=Envelope[Booking])
def approve_booking(
    booking_id: int, service: BookingService = Depends(get_booking_service)
) -> dict:
    """Confirm a pending booking."""
    return {"data": service.approve(booking_id), "message": "Booking confirmed successfully"}


@router.post("/{booking_id}/reject", response_model=Envelope[Booking])
def reject_booking(
    booking_id: int, service: BookingService = Depends(get_booking_service)
) -> dict:
    """Decline a pending booking."""
    return {"data": service.reject(booking_id), "message": "Booking rejected successfully"}
