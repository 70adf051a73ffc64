"""
Booking rule registry.

Static scheduling constants shared by the slot validator, the allocation
counter and the geographic weighting. Hour values are fractional
(``9.5`` is 09:30).
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

SLOT_DURATION: Mapping[str, int] = MappingProxyType(
    {
        "AMC": 90,
        "REGULAR": 60,
        "REPAIR": 120,
    }
)

BUFFER_MINUTES = 30
MIN_BOOKING_HOURS = 24
MAX_BOOKING_DAYS = 104

BUSINESS_HOURS: Mapping[str, float] = MappingProxyType(
    {
        "START": 9.5,
        "END": 17.0,
        "FRIDAY_END": 16.5,
    }
)

PEAK_HOURS: Mapping[str, object] = MappingProxyType(
    {
        "START": 14,
        "END": 18,
        "WARNING": "Peak hours (2 PM - 6 PM) may experience delays in technician arrival",
    }
)

MAX_SLOTS_PER_DAY: Mapping[str, int] = MappingProxyType(
    {
        "AMC": 3,
        "TOTAL": 6,
        "MIN_REGULAR": 4,
    }
)

AMC_RECOMMENDED_HOURS: Mapping[str, object] = MappingProxyType(
    {
        "START": 9.5,
        "END": 13.0,
        "MESSAGE": "AMC services are recommended between 9:30 AM and 1:00 PM for best results",
    }
)

# Full weight inside the inner radius, zero beyond the service radius.
WEIGHT_FULL_KM = 5.0
SERVICE_RADIUS_KM = 8.0

FRIDAY = 4  # datetime.weekday()


@dataclass(frozen=True)
class BookingRules:
    amc_duration: int = SLOT_DURATION["AMC"]
    regular_duration: int = SLOT_DURATION["REGULAR"]
    repair_duration: int = SLOT_DURATION["REPAIR"]
    buffer_minutes: int = BUFFER_MINUTES
    lead_time_hours: int = MIN_BOOKING_HOURS
    max_booking_days: int = MAX_BOOKING_DAYS
    start_hour: float = BUSINESS_HOURS["START"]
    end_hour: float = BUSINESS_HOURS["END"]
    friday_end_hour: float = BUSINESS_HOURS["FRIDAY_END"]
    peak_start: float = PEAK_HOURS["START"]
    peak_end: float = PEAK_HOURS["END"]
    peak_warning: str = PEAK_HOURS["WARNING"]
    max_amc: int = MAX_SLOTS_PER_DAY["AMC"]
    max_total: int = MAX_SLOTS_PER_DAY["TOTAL"]
    min_regular: int = MAX_SLOTS_PER_DAY["MIN_REGULAR"]
    amc_recommended_start: float = AMC_RECOMMENDED_HOURS["START"]
    amc_recommended_end: float = AMC_RECOMMENDED_HOURS["END"]
    amc_recommended_message: str = AMC_RECOMMENDED_HOURS["MESSAGE"]
    weight_full_km: float = WEIGHT_FULL_KM
    service_radius_km: float = SERVICE_RADIUS_KM

    def default_duration(self, is_amc: bool) -> int:
        return self.amc_duration if is_amc else self.regular_duration


DEFAULT_RULES = BookingRules()
