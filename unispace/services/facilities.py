"""Service for facility administration."""

from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from unispace.domain.errors import NotFoundError
from unispace.domain.models import Facility, FacilityCreate, FacilityUpdate
from unispace.repos.sql import FacilityRepository

logger = logging.getLogger(__name__)


class FacilityService:
    def __init__(self, session: Session) -> None:
        self.facilities = FacilityRepository(session)

    def list_all(self) -> list[Facility]:
        return [Facility.model_validate(row) for row in self.facilities.list_all()]

    def get(self, facility_id: int) -> Facility:
        row = self.facilities.get(facility_id)
        if row is None:
            raise NotFoundError("Facility", facility_id)
        return Facility.model_validate(row)

    def create(self, payload: FacilityCreate) -> Facility:
        row = self.facilities.add(**payload.model_dump())
        logger.info("Facility %s created: %s", row.id, row.name)
        return Facility.model_validate(row)

    def update(self, facility_id: int, payload: FacilityUpdate) -> Facility:
        row = self.facilities.get(facility_id)
        if row is None:
            raise NotFoundError("Facility", facility_id)
        self.facilities.update(row, payload.model_dump(exclude_unset=True, exclude_none=True))
        return Facility.model_validate(row)

    def delete(self, facility_id: int) -> Facility:
        """Delete a facility; its bookings go with it."""
        row = self.facilities.get(facility_id)
        if row is None:
            raise NotFoundError("Facility", facility_id)
        deleted = Facility.model_validate(row)
        self.facilities.delete(row)
        logger.info("Facility %s deleted", facility_id)
        return deleted
