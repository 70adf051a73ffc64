from __future__ import annotations

import logging

from booking_engine.application.ports.notifications import NotificationPort

_LEVELS = {
    "error": logging.ERROR,
    "warning": logging.WARNING,
}


class LogNotifier(NotificationPort):
    def __init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def notify(self, level: str, message: str) -> None:
        self._logger.log(
            _LEVELS.get(level, logging.INFO),
            "Booking notification",
            extra={"level": level, "reason": message},
        )
