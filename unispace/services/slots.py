"""Service for enumerating fixed-width bookable slots in an operating window."""

from __future__ import annotations

from datetime import date, datetime, time, timedelta

from unispace.domain.models import TimeRange

OPENING_TIME = time(8, 0)
CLOSING_TIME = time(22, 0)
SLOT_WIDTH = timedelta(minutes=30)

# Arbitrary calendar day used to do arithmetic on times of day.
_ANCHOR = date(2000, 1, 1)


def generate_slots(
    window_start: time = OPENING_TIME,
    window_end: time = CLOSING_TIME,
    slot_width: timedelta = SLOT_WIDTH,
) -> list[TimeRange]:
    """Return consecutive slots of exactly *slot_width* from *window_start*.

    Generation stops once the next slot would end after *window_end*; a
    trailing remainder shorter than *slot_width* is dropped.
    """
    if slot_width <= timedelta(0):
        raise ValueError("slot_width must be positive")

    cursor = datetime.combine(_ANCHOR, window_start)
    limit = datetime.combine(_ANCHOR, window_end)

    slots: list[TimeRange] = []
    while cursor + slot_width <= limit:
        slot_end = cursor + slot_width
        slots.append(TimeRange(start=cursor.time(), end=slot_end.time()))
        cursor = slot_end
    return slots
