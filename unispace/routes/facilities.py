"""Facility routes: browsing for everyone, CRUD for administrators."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from unispace.dependencies import get_facility_service
from unispace.domain.models import Envelope, Facility, FacilityCreate, FacilityUpdate
from unispace.services.facilities import FacilityService

router = APIRouter(prefix="/api/facilities", tags=["facilities"])


@router.get("", response_model=Envelope[list[Facility]])
def list_facilities(service: FacilityService = Depends(get_facility_service)) -> dict:
    """Return all facilities ordered by name."""
    return {"data": service.list_all(), "message": "Facilities retrieved successfully"}


@router.get("/{facility_id}", response_model=Envelope[Facility])
def get_facility(
    facility_id: int, service: FacilityService = Depends(get_facility_service)
) -> dict:
    return {"data": service.get(facility_id), "message": "Facility retrieved successfully"}


@router.post("", response_model=Envelope[Facility], status_code=status.HTTP_201_CREATED)
def create_facility(
    payload: FacilityCreate, service: FacilityService = Depends(get_facility_service)
) -> dict:
    return {"data": service.create(payload), "message": "Facility created successfully"}


@router.put("/{facility_id}", response_model=Envelope[Facility])
def update_facility(
    facility_id: int,
    payload: FacilityUpdate,
    service: FacilityService = Depends(get_facility_service),
) -> dict:
    return {
        "data": service.update(facility_id, payload),
        "message": "Facility updated successfully",
    }


@router.delete("/{facility_id}", response_model=Envelope[Facility])
def delete_facility(
    facility_id: int, service: FacilityService = Depends(get_facility_service)
) -> dict:
    return {"data": service.delete(facility_id), "message": "Facility deleted successfully"}
