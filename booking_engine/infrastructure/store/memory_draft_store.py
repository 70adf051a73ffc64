from __future__ import annotations

import threading

from booking_engine.application.use_cases.booking_machine import BookingMachine, Subscriber


class MemoryDraftStore:
    """In-process registry of booking drafts, one ``BookingMachine`` per draft id."""

    def __init__(self, subscribers: list[Subscriber] | None = None) -> None:
        self._machines: dict[str, BookingMachine] = {}
        self._subscribers = list(subscribers or [])
        self._lock = threading.Lock()

    def get_or_create(self, draft_id: str) -> BookingMachine:
        with self._lock:
            machine = self._machines.get(draft_id)
            if machine is None:
                machine = BookingMachine(draft_id)
                for subscriber in self._subscribers:
                    machine.subscribe(subscriber)
                self._machines[draft_id] = machine
            return machine

    def get(self, draft_id: str) -> BookingMachine | None:
        with self._lock:
            return self._machines.get(draft_id)

    def discard(self, draft_id: str) -> bool:
        with self._lock:
            return self._machines.pop(draft_id, None) is not None
