"""Tests for the booking lifecycle gate — conflicts on write, status transitions."""

from __future__ import annotations

from datetime import date

import pytest

from unispace.domain import lifecycle
from unispace.domain.errors import BookingConflictError, InvalidStatusTransition
from unispace.domain.models import BookingStatus, Reservation, TimeRange

_DAY = date(2026, 3, 2)


def _reservation(**overrides) -> Reservation:
    defaults = dict(
        facility_id=1,
        user_id=7,
        date=_DAY,
        start_time="10:00",
        end_time="11:00",
        status=BookingStatus.CONFIRMED,
    )
    defaults.update(overrides)
    return Reservation(**defaults)


def _range(start: str, end: str) -> TimeRange:
    return TimeRange(start=start, end=end)


# ---------------------------------------------------------------------------
# Conflict gate
# ---------------------------------------------------------------------------


def test_overlapping_candidate_is_rejected():
    with pytest.raises(BookingConflictError) as excinfo:
        lifecycle.propose_booking(_reservation(), [_range("10:30", "11:30")])

    err = excinfo.value
    assert err.status_code == 409
    assert err.facility_id == 1
    assert err.date == _DAY
    assert err.details["start_time"] == "10:00"
    assert err.details["end_time"] == "11:00"
    assert err.message.startswith("Booking conflict")


def test_boundary_touching_candidate_is_accepted():
    candidate = _reservation()
    assert lifecycle.propose_booking(candidate, [_range("11:00", "12:00")]) is candidate


def test_empty_day_accepts_anything():
    candidate = _reservation(start_time="08:00", end_time="22:00")
    assert lifecycle.propose_booking(candidate, []) is candidate


def test_cancelled_candidate_never_conflicts():
    candidate = _reservation(status=BookingStatus.CANCELLED)
    assert lifecycle.propose_booking(candidate, [_range("10:00", "11:00")]) is candidate


def test_update_with_unchanged_range_does_not_conflict_with_itself():
    """Excluding the row being updated lets an unchanged range be resubmitted."""
    stored = _reservation(id=42)
    others = _reservation(id=43, start_time="12:00", end_time="13:00")

    existing = lifecycle.active_ranges([stored, others], exclude_id=stored.id)
    assert existing == [_range("12:00", "13:00")]
    assert lifecycle.propose_booking(stored, existing) is stored


def test_update_without_exclusion_would_self_conflict():
    stored = _reservation(id=42)
    existing = lifecycle.active_ranges([stored])
    with pytest.raises(BookingConflictError):
        lifecycle.propose_booking(stored, existing)


def test_active_ranges_skip_cancelled():
    rows = [
        _reservation(id=1, status=BookingStatus.CANCELLED),
        _reservation(id=2, start_time="14:00", end_time="15:00", status=BookingStatus.PENDING),
    ]
    assert lifecycle.active_ranges(rows) == [_range("14:00", "15:00")]


def test_cancelled_booking_frees_its_slot():
    cancelled = _reservation(id=1, status=BookingStatus.CANCELLED)
    candidate = _reservation()
    existing = lifecycle.active_ranges([cancelled])
    assert lifecycle.propose_booking(candidate, existing) is candidate


# ---------------------------------------------------------------------------
# Status transitions
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    "current,target",
    [
        (BookingStatus.PENDING, BookingStatus.CONFIRMED),
        (BookingStatus.PENDING, BookingStatus.CANCELLED),
        (BookingStatus.CONFIRMED, BookingStatus.CANCELLED),
        (BookingStatus.PENDING, BookingStatus.PENDING),
        (BookingStatus.CONFIRMED, BookingStatus.CONFIRMED),
        (BookingStatus.CANCELLED, BookingStatus.CANCELLED),
    ],
)
def test_allowed_transitions(current, target):
    updated = lifecycle.transition(_reservation(status=current), target)
    assert updated.status == target


@pytest.mark.parametrize(
    "current,target",
    [
        (BookingStatus.CONFIRMED, BookingStatus.PENDING),
        (BookingStatus.CANCELLED, BookingStatus.PENDING),
        (BookingStatus.CANCELLED, BookingStatus.CONFIRMED),
    ],
)
def test_rejected_transitions(current, target):
    with pytest.raises(InvalidStatusTransition) as excinfo:
        lifecycle.transition(_reservation(status=current), target)
    assert excinfo.value.status_code == 400


def test_transition_returns_copy():
    original = _reservation(status=BookingStatus.PENDING)
    updated = lifecycle.transition(original, BookingStatus.CONFIRMED)
    assert original.status == BookingStatus.PENDING
    assert updated.time_range == original.time_range


def test_status_change_skips_conflict_check(monkeypatch):
    """Status-only changes never consult the conflict checker."""

    def _boom(*_args, **_kwargs):
        raise AssertionError("conflict checker must not run for status changes")

    monkeypatch.setattr(lifecycle, "has_conflict", _boom)

    pending = _reservation(status=BookingStatus.PENDING)
    assert lifecycle.approve(pending).status == BookingStatus.CONFIRMED
    assert lifecycle.reject(pending).status == BookingStatus.CANCELLED
    confirmed = _reservation()
    assert lifecycle.transition(confirmed, BookingStatus.CANCELLED).status == BookingStatus.CANCELLED


def test_approve_requires_pending():
    with pytest.raises(InvalidStatusTransition):
        lifecycle.approve(_reservation(status=BookingStatus.CONFIRMED))


def test_reject_requires_pending():
    with pytest.raises(InvalidStatusTransition):
        lifecycle.reject(_reservation(status=BookingStatus.CANCELLED))
