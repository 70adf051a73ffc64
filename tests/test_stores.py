"""
Tests for the in-memory stores and the appointment catalog.
"""

from __future__ import annotations

from datetime import date, datetime

import pytest

from booking_engine.application.use_cases.booking_machine import BookingMachine
from booking_engine.domain.entities.appointment_type import AppointmentType
from booking_engine.domain.entities.booking_action import Cancel
from booking_engine.domain.entities.existing_booking import ExistingBookingSnapshot
from booking_engine.infrastructure.catalog.appointment_catalog_store import AppointmentCatalogStore
from booking_engine.infrastructure.store.memory_booking_store import MemoryBookingStore
from booking_engine.infrastructure.store.memory_draft_store import MemoryDraftStore


def test_booking_store_roundtrip():
    """Bookings are kept per day and reads return copies."""
    day = date(2025, 1, 21)
    booking = ExistingBookingSnapshot(datetime=datetime(2025, 1, 21, 10, 0), duration=60)
    store = MemoryBookingStore()

    store.add_booking(day, booking)
    snapshot = store.get_bookings(day)
    snapshot.append(booking)

    assert store.get_bookings(day) == [booking]
    assert store.get_bookings(date(2025, 1, 22)) == []

    store.clear()
    assert store.get_bookings(day) == []


def test_booking_store_seeded():
    """Test that the store can be seeded with bookings."""
    day = date(2025, 1, 21)
    seed = [ExistingBookingSnapshot(datetime=datetime(2025, 1, 21, 10, 0), duration=90, type="amc")]

    store = MemoryBookingStore({day: seed})
    seed.clear()

    assert len(store.get_bookings(day)) == 1
    assert store.get_bookings(day)[0].is_amc is True


def test_existing_booking_end():
    """Test that a booking's end is start plus duration."""
    booking = ExistingBookingSnapshot(datetime=datetime(2025, 1, 21, 10, 0), duration=90)

    assert booking.end == datetime(2025, 1, 21, 11, 30)
    assert booking.is_amc is False


def test_catalog_lookup_is_normalized():
    """Test that catalog lookups ignore case and spacing."""
    catalog = AppointmentCatalogStore()

    amc = catalog.get_appointment_type("  AMC_Servicing ")

    assert amc is not None
    assert amc.is_amc is True
    assert amc.duration == 90
    assert catalog.get_appointment_type("repair_diagnostic").duration == 120
    assert catalog.get_appointment_type("unknown") is None
    assert len(catalog.list_appointment_types()) == 6


def test_appointment_type_requires_positive_duration():
    """Test that appointment types need a positive duration."""
    with pytest.raises(ValueError):
        AppointmentType(id="bad", name="Bad", duration=0)


def test_draft_store_reuses_machines_and_attaches_subscribers():
    """Test that drafts reuse machines and get subscribers attached."""
    seen = []
    drafts = MemoryDraftStore(subscribers=[lambda prev, cur, action: seen.append(cur.status.value)])

    machine = drafts.get_or_create("d1")
    assert isinstance(machine, BookingMachine)
    assert drafts.get_or_create("d1") is machine
    assert drafts.get("d2") is None

    machine.dispatch(Cancel())
    assert seen == ["CANCELLED"]

    assert drafts.discard("d1") is True
    assert drafts.discard("d1") is False
    assert drafts.get("d1") is None


if __name__ == "__main__":
    test_booking_store_roundtrip()
    test_booking_store_seeded()
    test_existing_booking_end()
    test_catalog_lookup_is_normalized()
    test_appointment_type_requires_positive_duration()
    test_draft_store_reuses_machines_and_attaches_subscribers()
    print("All tests passed!")
