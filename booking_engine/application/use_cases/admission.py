from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from datetime import date, datetime

from booking_engine.application.ports.booking_store import BookingStorePort
from booking_engine.application.use_cases.slot_validation import (
    business_now,
    resolve_duration,
    to_business_local,
    validate_slot,
)
from booking_engine.domain.entities.appointment_type import AppointmentType
from booking_engine.domain.entities.existing_booking import (
    AMC_TYPE,
    REGULAR_TYPE,
    ExistingBookingSnapshot,
)
from booking_engine.domain.entities.time_slot import TimeSlot
from booking_engine.domain.entities.validation import ValidationResult
from booking_engine.domain.rules import DEFAULT_RULES, BookingRules


@dataclass(frozen=True)
class AdmissionResult:
    day: date
    result: ValidationResult
    booking: ExistingBookingSnapshot | None = None


class AdmissionUseCase:
    """
    Admits bookings against a day's quota.

    Admission for one calendar day runs inside that day's critical section:
    read the snapshot, validate the slot against it, commit. Two requests for
    the same day cannot both pass on the same snapshot. Locks for days that
    have already passed are dropped when new ones are created.
    """

    def __init__(
        self,
        store: BookingStorePort,
        rules: BookingRules = DEFAULT_RULES,
        lead_time_hours: int | None = None,
    ) -> None:
        self._store = store
        self._rules = rules
        self._lead_time_hours = lead_time_hours
        self._locks: dict[date, threading.Lock] = {}
        self._lock_lock = threading.Lock()  # guards _locks
        self._logger = logging.getLogger(__name__)

    @property
    def tracked_days(self) -> list[date]:
        with self._lock_lock:
            return sorted(self._locks)

    def _get_lock(self, day: date, today: date) -> threading.Lock:
        with self._lock_lock:
            stale = [d for d, lock in self._locks.items() if d < today and d != day and not lock.locked()]
            for d in stale:
                del self._locks[d]
            if day not in self._locks:
                self._locks[day] = threading.Lock()
            return self._locks[day]

    def admit(
        self,
        slot: TimeSlot,
        is_amc: bool,
        appointment_type: AppointmentType | None = None,
        now: datetime | None = None,
    ) -> AdmissionResult:
        day = to_business_local(slot.datetime).date()
        today = (business_now() if now is None else to_business_local(now)).date()

        with self._get_lock(day, today):
            existing = self._store.get_bookings(day)
            result = validate_slot(
                slot,
                is_amc,
                existing,
                appointment_type,
                now=now,
                rules=self._rules,
                lead_time_hours=self._lead_time_hours,
            )
            if not result.is_valid:
                self._logger.info(
                    "Booking rejected",
                    extra={"day": day.isoformat(), "reason": result.errors[0]},
                )
                return AdmissionResult(day=day, result=result)

            booking = ExistingBookingSnapshot(
                datetime=slot.datetime,
                duration=resolve_duration(slot, is_amc, appointment_type, self._rules),
                type=AMC_TYPE if is_amc else REGULAR_TYPE,
            )
            self._store.add_booking(day, booking)

        self._logger.info(
            "Booking admitted",
            extra={"day": day.isoformat(), "amc": is_amc, "slot_id": slot.id},
        )
        return AdmissionResult(day=day, result=result, booking=booking)
