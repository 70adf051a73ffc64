"""
Tests for slot optimization: closed days, business-hour filtering and
preference scoring.
"""

from __future__ import annotations

from datetime import date, datetime

import pytest

from booking_engine.application.use_cases.slot_optimizer import (
    count_nearby_bookings,
    is_closed_day,
    optimize_slots,
    score_slot,
)
from booking_engine.domain.entities.existing_booking import ExistingBookingSnapshot
from booking_engine.domain.entities.time_slot import TimeSlot

DAY = date(2025, 1, 21)  # Tuesday


def _slot(hour: int, minute: int = 0, **kwargs) -> TimeSlot:
    return TimeSlot(id=f"{hour:02d}{minute:02d}", datetime=datetime(2025, 1, 21, hour, minute), **kwargs)


def _booking(hour: int, minute: int = 0, duration: int = 60) -> ExistingBookingSnapshot:
    return ExistingBookingSnapshot(datetime=datetime(2025, 1, 21, hour, minute), duration=duration)


def test_weekends_and_holidays_are_closed():
    """Test that Saturdays, Sundays and listed holidays offer no slots."""
    assert is_closed_day(date(2025, 1, 25)) is True
    assert is_closed_day(date(2025, 1, 26)) is True
    assert is_closed_day(DAY) is False
    assert is_closed_day(DAY, {DAY}) is True

    saturday = [TimeSlot(id="sat", datetime=datetime(2025, 1, 25, 10, 0))]
    assert optimize_slots(date(2025, 1, 25), saturday) == []
    assert optimize_slots(DAY, [_slot(10, 0)], holidays={DAY}) == []


def test_morning_and_peak_scores():
    """Test that mornings score 2, afternoons 1, and peak hours lose 0.8."""
    assert score_slot(_slot(9, 30)) == 2.0
    assert score_slot(_slot(12, 0)) == 2.0
    assert score_slot(_slot(13, 0)) == 1.0
    assert score_slot(_slot(15, 0)) == pytest.approx(0.2)


def test_weight_and_nearby_bookings_adjust_score():
    """Test that distance weight adds to and nearby bookings subtract from a score."""
    assert score_slot(_slot(13, 0, weight=0.5)) == pytest.approx(1.5)
    assert score_slot(_slot(13, 0), nearby=1) == pytest.approx(0.5)


def test_count_nearby_bookings_uses_one_hour_window():
    """Test that bookings within an hour either side of a slot count as nearby."""
    bookings = [_booking(16, 0)]

    assert count_nearby_bookings(_slot(14, 30), 60, bookings) == 1
    assert count_nearby_bookings(_slot(14, 0), 60, bookings) == 0


def test_slots_are_ordered_by_score():
    """Test that mornings come first and crowded peak slots come last."""
    slots = [_slot(13, 0), _slot(14, 30), _slot(10, 0)]

    scored = optimize_slots(DAY, slots, [_booking(16, 0)])

    assert [item.slot.id for item in scored] == ["1000", "1300", "1430"]
    assert [item.score for item in scored] == [2.0, 1.0, pytest.approx(-0.3)]


def test_ties_keep_input_order():
    """Test that equally scored slots stay in their original order."""
    scored = optimize_slots(DAY, [_slot(11, 0), _slot(10, 0)])

    assert [item.slot.id for item in scored] == ["1100", "1000"]


def test_closed_and_crowded_slots_are_dropped():
    """Test that unavailable, out-of-hours, other-day and crowded slots are left out."""
    slots = [
        _slot(9, 0),
        _slot(10, 0, available=False),
        _slot(17, 0),
        _slot(12, 30),
        TimeSlot(id="wed", datetime=datetime(2025, 1, 22, 10, 0)),
        _slot(16, 0),
    ]
    bookings = [_booking(11, 30), _booking(13, 30)]

    scored = optimize_slots(DAY, slots, bookings)

    assert [item.slot.id for item in scored] == ["1600"]


def test_friday_closes_early():
    """Test that Friday slots after 16:30 are not offered."""
    friday = date(2025, 1, 24)
    slots = [
        TimeSlot(id="late", datetime=datetime(2025, 1, 24, 16, 30)),
        TimeSlot(id="ok", datetime=datetime(2025, 1, 24, 16, 0)),
    ]

    assert [item.slot.id for item in optimize_slots(friday, slots)] == ["ok"]


def test_slot_duration_widens_nearby_window():
    """Test that a longer slot reaches bookings a short slot does not."""
    bookings = [_booking(13, 30)]

    assert count_nearby_bookings(_slot(10, 0), 60, bookings) == 0
    assert count_nearby_bookings(_slot(10, 0), 180, bookings) == 1

    scored = optimize_slots(DAY, [_slot(10, 0, duration=180)], bookings)
    assert scored[0].score == pytest.approx(1.5)
