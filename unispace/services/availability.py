"""Service for computing the free slots of a facility on one day."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from unispace.domain.models import TimeRange
from unispace.services.conflicts import has_conflict
from unispace.services.slots import generate_slots


@dataclass(frozen=True)
class DayAvailability:
    available: list[TimeRange] = field(default_factory=list)
    booked: list[TimeRange] = field(default_factory=list)


def compute_availability(
    existing: Iterable[TimeRange],
    slots: Sequence[TimeRange] | None = None,
) -> DayAvailability:
    """Keep every candidate slot that does not overlap an existing booking.

    *slots* defaults to the standard 08:00-22:00 grid of 30-minute slots.
    The existing ranges are handed back unchanged as ``booked`` for display.
    """
    booked = list(existing)
    candidates = generate_slots() if slots is None else slots
    available = [slot for slot in candidates if not has_conflict(slot, booked)]
    return DayAvailability(available=available, booked=booked)
