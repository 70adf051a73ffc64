from __future__ import annotations

from typing import Iterable

from booking_engine.domain.entities.existing_booking import ExistingBookingSnapshot
from booking_engine.domain.entities.validation import ErrorKind, ValidationResult
from booking_engine.domain.rules import DEFAULT_RULES, BookingRules

NO_SLOTS_FOR_DAY = "No more slots available for this day"
MAX_AMC_REACHED = "Maximum AMC slots for the day reached"
RESERVED_FOR_REGULAR = "Remaining slots reserved for regular bookings"
NO_REGULAR_SLOTS = "No more slots available for regular bookings"


def count_bookings_by_tier(bookings: Iterable[ExistingBookingSnapshot]) -> tuple[int, int]:
    """Return (amc_count, regular_count) for a day's bookings."""
    amc = 0
    regular = 0
    for booking in bookings:
        if booking.is_amc:
            amc += 1
        else:
            regular += 1
    return amc, regular


def check_allocation(
    is_amc: bool,
    amc_count: int,
    regular_count: int,
    total_cap: int | None = None,
    rules: BookingRules = DEFAULT_RULES,
) -> ValidationResult:
    """
    Decide whether one more booking of the given tier fits the day's quota.

    Works on aggregate counts only, so it can pre-filter a day before exact
    slot times are known.
    """
    if total_cap is None:
        total_cap = rules.max_total

    remaining = total_cap - (amc_count + regular_count)
    if remaining <= 0:
        return ValidationResult.reject(NO_SLOTS_FOR_DAY, ErrorKind.QUOTA_EXCEEDED)

    if is_amc:
        if amc_count >= rules.max_amc:
            return ValidationResult.reject(MAX_AMC_REACHED, ErrorKind.QUOTA_EXCEEDED)
        if remaining <= max(0, rules.min_regular - regular_count):
            return ValidationResult.reject(RESERVED_FOR_REGULAR, ErrorKind.QUOTA_EXCEEDED)
    elif regular_count >= total_cap - rules.max_amc:
        return ValidationResult.reject(NO_REGULAR_SLOTS, ErrorKind.QUOTA_EXCEEDED)

    return ValidationResult.ok()
