from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date

from booking_engine.domain.entities.existing_booking import ExistingBookingSnapshot


class BookingStorePort(ABC):
    @abstractmethod
    def get_bookings(self, day: date) -> list[ExistingBookingSnapshot]:
        """Get bookings already committed for a calendar day."""
        raise NotImplementedError

    @abstractmethod
    def add_booking(self, day: date, booking: ExistingBookingSnapshot) -> None:
        """Commit an admitted booking for a calendar day."""
        raise NotImplementedError
