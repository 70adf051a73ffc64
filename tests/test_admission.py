"""
Admission against a shared store: quota holds across sequential and
concurrent requests for the same day.
"""

from __future__ import annotations

import threading
from datetime import date, datetime, timedelta, timezone

from booking_engine.application.use_cases.admission import AdmissionUseCase
from booking_engine.application.use_cases.allocation import MAX_AMC_REACHED, NO_REGULAR_SLOTS
from booking_engine.application.use_cases.slot_validation import OVERLAP_ERROR
from booking_engine.domain.entities.appointment_type import AppointmentType
from booking_engine.domain.entities.time_slot import TimeSlot
from booking_engine.domain.entities.validation import ErrorKind
from booking_engine.infrastructure.store.memory_booking_store import MemoryBookingStore

NOW = datetime(2025, 1, 10, 8, 0)
DAY = date(2025, 1, 21)


def _slot(hour: int, minute: int = 0, slot_id: str | None = None, duration: int | None = None) -> TimeSlot:
    return TimeSlot(
        id=slot_id or f"{hour:02d}{minute:02d}",
        datetime=datetime(2025, 1, 21, hour, minute),
        duration=duration,
    )


def _assert_no_buffered_overlap(bookings, buffer_minutes: int = 30) -> None:
    ordered = sorted(bookings, key=lambda b: b.datetime)
    for a, b in zip(ordered, ordered[1:]):
        assert a.end + timedelta(minutes=buffer_minutes) <= b.datetime


def test_admitted_booking_is_committed():
    """Test that an accepted slot is stored with the tier default duration."""
    store = MemoryBookingStore()
    admission = AdmissionUseCase(store)

    outcome = admission.admit(_slot(10, 0), is_amc=True, now=NOW)

    assert outcome.day == DAY
    assert outcome.result.is_valid is True
    assert outcome.booking is not None
    assert outcome.booking.duration == 90
    assert outcome.booking.is_amc is True
    assert store.get_bookings(DAY) == [outcome.booking]


def test_rejected_booking_is_not_committed():
    """Test that an overlapping request leaves the store untouched."""
    store = MemoryBookingStore()
    admission = AdmissionUseCase(store)

    admission.admit(_slot(10, 0), is_amc=False, now=NOW)
    outcome = admission.admit(_slot(10, 30), is_amc=False, now=NOW)

    assert outcome.result.errors == [OVERLAP_ERROR]
    assert outcome.booking is None
    assert len(store.get_bookings(DAY)) == 1


def test_appointment_type_duration_is_stored():
    """Test that the committed booking keeps the appointment type's duration."""
    store = MemoryBookingStore()
    admission = AdmissionUseCase(store)
    repair = AppointmentType(id="repair_diagnostic", name="Repair", duration=120)

    outcome = admission.admit(_slot(9, 30), is_amc=False, appointment_type=repair, now=NOW)

    assert outcome.booking.duration == 120
    assert admission.admit(_slot(11, 30), is_amc=False, now=NOW).result.errors == [OVERLAP_ERROR]
    assert admission.admit(_slot(12, 0), is_amc=False, now=NOW).result.is_valid is True


def test_slot_duration_is_stored():
    """Test that a slot's own duration is used when no appointment type is given."""
    store = MemoryBookingStore()
    admission = AdmissionUseCase(store)

    outcome = admission.admit(_slot(9, 30, duration=120), is_amc=False, now=NOW)

    assert outcome.booking.duration == 120
    assert admission.admit(_slot(11, 30), is_amc=False, now=NOW).result.errors == [OVERLAP_ERROR]


def test_fourth_regular_booking_is_admitted():
    """Test that a quiet day takes four regular bookings and refuses the fifth."""
    store = MemoryBookingStore()
    admission = AdmissionUseCase(store)

    outcomes = [admission.admit(_slot(h, m), is_amc=False, now=NOW) for h, m in [(9, 30), (11, 0), (12, 30), (14, 0)]]
    fifth = admission.admit(_slot(15, 30), is_amc=False, now=NOW)

    assert [o.result.is_valid for o in outcomes] == [True, True, True, True]
    assert fifth.result.errors == [NO_REGULAR_SLOTS]
    assert fifth.result.kind == ErrorKind.QUOTA_EXCEEDED
    assert len(store.get_bookings(DAY)) == 4


def test_quota_holds_over_sequence():
    """Test that alternating tiers never exceed the AMC, regular or total caps."""
    store = MemoryBookingStore()
    admission = AdmissionUseCase(store)
    candidates = [(h, m) for h in range(9, 17) for m in (0, 30)]

    for i, (hour, minute) in enumerate(candidates):
        admission.admit(_slot(hour, minute), is_amc=i % 2 == 0, now=NOW)

    bookings = store.get_bookings(DAY)
    amc = sum(1 for b in bookings if b.is_amc)
    regular = len(bookings) - amc
    assert amc <= 3
    assert regular <= 4
    assert len(bookings) <= 6
    assert len(bookings) > 0
    _assert_no_buffered_overlap(bookings)


def test_mixed_naive_and_aware_requests_share_a_day():
    """Test that a naive booking and an aware request for the same day are compared in local time."""
    store = MemoryBookingStore()
    admission = AdmissionUseCase(store)
    aware_now = datetime(2025, 1, 10, 0, 0, tzinfo=timezone.utc)
    # 02:30 UTC is 10:30 in Singapore; 06:00 UTC is 14:00.
    clash = TimeSlot(id="clash", datetime=datetime(2025, 1, 21, 2, 30, tzinfo=timezone.utc))
    clear = TimeSlot(id="clear", datetime=datetime(2025, 1, 21, 6, 0, tzinfo=timezone.utc))

    first = admission.admit(_slot(10, 0), is_amc=False, now=NOW)
    rejected = admission.admit(clash, is_amc=False, now=aware_now)
    accepted = admission.admit(clear, is_amc=False, now=aware_now)

    assert first.result.is_valid is True
    assert rejected.day == DAY
    assert rejected.result.errors == [OVERLAP_ERROR]
    assert accepted.day == DAY
    assert accepted.result.is_valid is True
    assert len(store.get_bookings(DAY)) == 2


def test_days_are_independent():
    """Test that bookings on one day do not count against another."""
    store = MemoryBookingStore()
    admission = AdmissionUseCase(store)
    other_day = TimeSlot(id="wed", datetime=datetime(2025, 1, 22, 10, 0))

    admission.admit(_slot(10, 0), is_amc=True, now=NOW)
    outcome = admission.admit(other_day, is_amc=True, now=NOW)

    assert outcome.result.is_valid is True
    assert len(store.get_bookings(date(2025, 1, 22))) == 1


def test_locks_for_past_days_are_dropped():
    """Test that day locks do not accumulate once their day is over."""
    admission = AdmissionUseCase(MemoryBookingStore())

    admission.admit(_slot(10, 0), is_amc=False, now=NOW)
    assert admission.tracked_days == [DAY]

    later_slot = TimeSlot(id="feb", datetime=datetime(2025, 2, 4, 10, 0))
    admission.admit(later_slot, is_amc=False, now=datetime(2025, 1, 25, 8, 0))

    assert admission.tracked_days == [date(2025, 2, 4)]


def test_concurrent_admissions_respect_quota():
    """Test that eight racing AMC requests admit exactly three without overlap."""
    store = MemoryBookingStore()
    admission = AdmissionUseCase(store)
    times = [(9, 30), (11, 30), (13, 30), (15, 30)] * 2
    barrier = threading.Barrier(len(times))
    outcomes = []
    outcomes_lock = threading.Lock()

    def worker(i: int, hour: int, minute: int) -> None:
        barrier.wait()
        outcome = admission.admit(_slot(hour, minute, slot_id=f"req-{i}"), is_amc=True, now=NOW)
        with outcomes_lock:
            outcomes.append(outcome)

    threads = [threading.Thread(target=worker, args=(i, h, m)) for i, (h, m) in enumerate(times)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    admitted = [o for o in outcomes if o.booking is not None]
    rejected = [o for o in outcomes if o.booking is None]
    assert len(admitted) == 3
    assert len(store.get_bookings(DAY)) == 3
    assert any(o.result.errors == [MAX_AMC_REACHED] for o in rejected)
    assert all(o.result.errors[0] in (MAX_AMC_REACHED, OVERLAP_ERROR) for o in rejected)
    _assert_no_buffered_overlap(store.get_bookings(DAY))
