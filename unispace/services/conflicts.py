"""Service for detecting overlaps between time ranges on a single day."""

from __future__ import annotations

from collections.abc import Iterable

from unispace.domain.models import TimeRange


def overlaps(a: TimeRange, b: TimeRange) -> bool:
    """Whether the ranges ``[a.start, a.end)`` and ``[b.start, b.end)`` intersect.

    A booking ending at 10:00 and another starting at 10:00 can coexist.
    """
    return a.start < b.end and b.start < a.end


def find_conflicts(candidate: TimeRange, existing: Iterable[TimeRange]) -> list[TimeRange]:
    """Return the existing ranges that overlap with *candidate*.

    *existing* must already be restricted to one facility, one date and
    non-cancelled reservations.
    """
    return [booked for booked in existing if overlaps(candidate, booked)]


def has_conflict(candidate: TimeRange, existing: Iterable[TimeRange]) -> bool:
    return any(overlaps(candidate, booked) for booked in existing)
