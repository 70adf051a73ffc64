"""
Slot optimizer.

Drops closed days (weekends and holidays), keeps open slots inside business
hours, then orders them by preference: mornings score higher, peak hours are
penalized, slots crowded by nearby bookings are penalized or dropped, and a
distance weight, when attached, is added on top.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import date, timedelta
from typing import Collection, Sequence

from booking_engine.application.use_cases.slot_validation import (
    hour_value,
    resolve_duration,
    to_business_local,
)
from booking_engine.domain.entities.appointment_type import AppointmentType
from booking_engine.domain.entities.existing_booking import ExistingBookingSnapshot
from booking_engine.domain.entities.time_slot import TimeSlot
from booking_engine.domain.rules import DEFAULT_RULES, FRIDAY, BookingRules

logger = logging.getLogger(__name__)

SATURDAY = 5
MORNING_END_HOUR = 12
MORNING_WEIGHT = 2.0
DEFAULT_TIME_WEIGHT = 1.0
PEAK_HOUR_PENALTY = 0.8
NEARBY_BOOKING_PENALTY = 0.5
NEARBY_WINDOW_MINUTES = 60
MAX_NEARBY_BOOKINGS = 2


@dataclass(frozen=True)
class ScoredSlot:
    slot: TimeSlot
    score: float


def is_closed_day(day: date, holidays: Collection[date] = ()) -> bool:
    return day.weekday() >= SATURDAY or day in holidays


def _within_business_hours(hour: float, weekday: int, rules: BookingRules) -> bool:
    end = rules.friday_end_hour if weekday == FRIDAY else rules.end_hour
    return rules.start_hour <= hour < end


def count_nearby_bookings(
    slot: TimeSlot,
    duration_minutes: int,
    existing_bookings: Sequence[ExistingBookingSnapshot],
    window_minutes: int = NEARBY_WINDOW_MINUTES,
) -> int:
    start = to_business_local(slot.datetime)
    end = start + timedelta(minutes=duration_minutes)
    window = timedelta(minutes=window_minutes)
    count = 0
    for booking in existing_bookings:
        local = replace(booking, datetime=to_business_local(booking.datetime))
        if start < local.end + window and local.datetime - window < end:
            count += 1
    return count


def score_slot(slot: TimeSlot, nearby: int = 0, rules: BookingRules = DEFAULT_RULES) -> float:
    hour = hour_value(to_business_local(slot.datetime))
    score = MORNING_WEIGHT if rules.start_hour <= hour <= MORNING_END_HOUR else DEFAULT_TIME_WEIGHT
    if rules.peak_start <= hour < rules.peak_end:
        score -= PEAK_HOUR_PENALTY
    score -= nearby * NEARBY_BOOKING_PENALTY
    if slot.weight is not None:
        score += slot.weight
    return score


def optimize_slots(
    day: date,
    slots: Sequence[TimeSlot],
    existing_bookings: Sequence[ExistingBookingSnapshot] = (),
    *,
    is_amc: bool = False,
    appointment_type: AppointmentType | None = None,
    holidays: Collection[date] = frozenset(),
    rules: BookingRules = DEFAULT_RULES,
) -> list[ScoredSlot]:
    """Open slots for ``day`` with their scores, best first. Ties keep input order."""
    if is_closed_day(day, holidays):
        logger.info("Closed day, no slots offered", extra={"day": day.isoformat()})
        return []

    scored: list[ScoredSlot] = []
    for slot in slots:
        local = to_business_local(slot.datetime)
        if not slot.available or local.date() != day:
            continue
        if not _within_business_hours(hour_value(local), local.weekday(), rules):
            continue
        duration = resolve_duration(slot, is_amc, appointment_type, rules)
        nearby = count_nearby_bookings(slot, duration, existing_bookings)
        if nearby >= MAX_NEARBY_BOOKINGS:
            continue
        scored.append(ScoredSlot(slot=slot, score=score_slot(slot, nearby, rules)))

    scored.sort(key=lambda item: -item.score)
    return scored
