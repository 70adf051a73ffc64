from __future__ import annotations

import logging

from booking_engine.application.ports.notifications import NotificationPort
from booking_engine.domain.entities.booking_action import BookingAction
from booking_engine.domain.entities.booking_state import BookingState, BookingStatus

STATUS_MESSAGES: dict[BookingStatus, tuple[str, str]] = {
    BookingStatus.CONFIRMED: ("success", "Booking confirmed"),
    BookingStatus.COMPLETED: ("success", "Booking completed"),
    BookingStatus.CANCELLED: ("info", "Booking cancelled"),
}


class BookingEffects:
    """
    Observes booking state deltas and turns them into notifications.

    Subscribe an instance to a ``BookingMachine``; the reducer itself never
    notifies anyone.
    """

    def __init__(self, notifier: NotificationPort) -> None:
        self._notifier = notifier
        self._logger = logging.getLogger(__name__)

    def __call__(self, previous: BookingState, current: BookingState, action: BookingAction) -> None:
        for level, message in self.collect(previous, current):
            try:
                self._notifier.notify(level, message)
            except Exception as e:
                self._logger.error(
                    "Notification delivery failed",
                    extra={"error": str(e), "status": current.status.value},
                )

    @staticmethod
    def collect(previous: BookingState, current: BookingState) -> list[tuple[str, str]]:
        """Notifications implied by the change from previous to current, in order."""
        out: list[tuple[str, str]] = []

        seen = set(previous.warnings)
        for warning in current.warnings:
            if warning not in seen:
                out.append(("warning", warning))
                seen.add(warning)

        if current.status is BookingStatus.ERROR and (
            previous.status is not BookingStatus.ERROR or previous.error != current.error
        ):
            out.append(("error", current.error or "Booking failed"))

        if current.status is not previous.status and current.status in STATUS_MESSAGES:
            out.append(STATUS_MESSAGES[current.status])

        return out
