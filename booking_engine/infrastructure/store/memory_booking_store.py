from __future__ import annotations

import threading
from datetime import date

from booking_engine.application.ports.booking_store import BookingStorePort
from booking_engine.domain.entities.existing_booking import ExistingBookingSnapshot


class MemoryBookingStore(BookingStorePort):
    def __init__(self, bookings: dict[date, list[ExistingBookingSnapshot]] | None = None) -> None:
        self._bookings: dict[date, list[ExistingBookingSnapshot]] = {
            day: list(items) for day, items in (bookings or {}).items()
        }
        self._lock = threading.Lock()

    def get_bookings(self, day: date) -> list[ExistingBookingSnapshot]:
        with self._lock:
            return list(self._bookings.get(day, []))

    def add_booking(self, day: date, booking: ExistingBookingSnapshot) -> None:
        with self._lock:
            self._bookings.setdefault(day, []).append(booking)

    def clear(self) -> None:
        with self._lock:
            self._bookings.clear()
