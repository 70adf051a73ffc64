"""
Slot validation.

Checks run in a fixed order and the first failing check returns its single
error. Only a slot that passes every check collects warnings.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime, timedelta, tzinfo
from typing import Sequence
from zoneinfo import ZoneInfo

from booking_engine.application.use_cases.allocation import (
    MAX_AMC_REACHED,
    NO_REGULAR_SLOTS,
    NO_SLOTS_FOR_DAY,
    count_bookings_by_tier,
)
from booking_engine.core.config import settings
from booking_engine.domain.entities.appointment_type import AppointmentType
from booking_engine.domain.entities.existing_booking import ExistingBookingSnapshot
from booking_engine.domain.entities.time_slot import TimeSlot
from booking_engine.domain.entities.validation import ErrorKind, ValidationResult
from booking_engine.domain.rules import DEFAULT_RULES, FRIDAY, BookingRules

logger = logging.getLogger(__name__)

HOURS_START_ERROR = "Service hours start at 9:30 AM"
FRIDAY_END_ERROR = "Last booking for Friday is 4:30 PM"
HOURS_END_ERROR = "Service hours end at 5:00 PM"
OVERLAP_ERROR = "Time slot overlaps with an existing booking"
UNAVAILABLE_ERROR = "Time slot is not available"
LEAD_TIME_ERROR = "Bookings must be made at least {hours} hours in advance"
HORIZON_ERROR = "Bookings cannot be made more than {days} days in advance"


def hour_value(moment: datetime) -> float:
    """Fractional hour of day, e.g. 09:30 -> 9.5."""
    return moment.hour + moment.minute / 60


def to_business_time(moment: datetime, timezone: tzinfo | None = None) -> datetime:
    """Aware datetimes are converted to the business timezone; naive ones are already local."""
    if moment.tzinfo is None:
        return moment
    return moment.astimezone(timezone or ZoneInfo(settings.BUSINESS_TIMEZONE))


def to_business_local(moment: datetime, timezone: tzinfo | None = None) -> datetime:
    """Business-local wall clock as a naive datetime, so naive and aware inputs compare."""
    return to_business_time(moment, timezone).replace(tzinfo=None)


def business_now(timezone: tzinfo | None = None) -> datetime:
    return datetime.now(timezone or ZoneInfo(settings.BUSINESS_TIMEZONE)).replace(tzinfo=None)


def resolve_duration(
    slot: TimeSlot,
    is_amc: bool,
    appointment_type: AppointmentType | None = None,
    rules: BookingRules = DEFAULT_RULES,
) -> int:
    """Appointment type first, then the slot's own duration, then the tier default."""
    if appointment_type is not None:
        return appointment_type.duration
    if slot.duration is not None:
        return slot.duration
    return rules.default_duration(is_amc)


def overlaps_existing(
    start: datetime,
    duration_minutes: int,
    existing_bookings: Sequence[ExistingBookingSnapshot],
    buffer_minutes: int,
) -> bool:
    """Half-open test of [start, start+duration) against each buffered booking interval."""
    end = start + timedelta(minutes=duration_minutes)
    buffer = timedelta(minutes=buffer_minutes)
    for booking in existing_bookings:
        buffered_start = booking.datetime - buffer
        buffered_end = booking.end + buffer
        if start < buffered_end and buffered_start < end:
            return True
    return False


def validate_slot(
    slot: TimeSlot,
    is_amc: bool,
    existing_bookings: Sequence[ExistingBookingSnapshot],
    appointment_type: AppointmentType | None = None,
    *,
    now: datetime | None = None,
    rules: BookingRules = DEFAULT_RULES,
    lead_time_hours: int | None = None,
    timezone: tzinfo | None = None,
) -> ValidationResult:
    local = to_business_local(slot.datetime, timezone)
    hour = hour_value(local)

    if hour < rules.start_hour:
        return ValidationResult.reject(HOURS_START_ERROR)

    if local.weekday() == FRIDAY:
        if hour >= rules.friday_end_hour:
            return ValidationResult.reject(FRIDAY_END_ERROR)
    elif hour >= rules.end_hour:
        return ValidationResult.reject(HOURS_END_ERROR)

    duration = resolve_duration(slot, is_amc, appointment_type, rules)
    if duration <= 0:
        raise ValueError("Slot duration must be positive")

    amc_count, regular_count = count_bookings_by_tier(existing_bookings)
    if is_amc and amc_count >= rules.max_amc:
        return ValidationResult.reject(MAX_AMC_REACHED, ErrorKind.QUOTA_EXCEEDED)
    # Regular bookings are capped at the reserved minimum.
    if not is_amc and regular_count >= rules.min_regular:
        return ValidationResult.reject(NO_REGULAR_SLOTS, ErrorKind.QUOTA_EXCEEDED)

    if amc_count + regular_count >= rules.max_total:
        return ValidationResult.reject(NO_SLOTS_FOR_DAY, ErrorKind.QUOTA_EXCEEDED)

    local_bookings = [
        replace(booking, datetime=to_business_local(booking.datetime, timezone)) for booking in existing_bookings
    ]
    if overlaps_existing(local, duration, local_bookings, rules.buffer_minutes):
        return ValidationResult.reject(OVERLAP_ERROR)

    if not slot.available:
        return ValidationResult.reject(UNAVAILABLE_ERROR)

    now = business_now(timezone) if now is None else to_business_local(now, timezone)
    lead_hours = lead_time_hours if lead_time_hours is not None else rules.lead_time_hours
    if local < now + timedelta(hours=lead_hours):
        return ValidationResult.reject(LEAD_TIME_ERROR.format(hours=lead_hours))

    if local > now + timedelta(days=rules.max_booking_days):
        return ValidationResult.reject(HORIZON_ERROR.format(days=rules.max_booking_days))

    warnings: list[str] = []
    if rules.peak_start <= hour < rules.peak_end:
        warnings.append(rules.peak_warning)
    if is_amc and rules.amc_recommended_start <= hour < rules.amc_recommended_end:
        warnings.append(rules.amc_recommended_message)

    logger.debug(
        "Slot accepted",
        extra={"slot_id": slot.id, "duration": duration, "warnings": len(warnings)},
    )
    return ValidationResult.ok(warnings)
