from __future__ import annotations

import math
from dataclasses import replace
from typing import Sequence

from booking_engine.domain.entities.geo import REGION_CENTERS, Coordinates, RegionId
from booking_engine.domain.entities.time_slot import TimeSlot
from booking_engine.domain.rules import DEFAULT_RULES, BookingRules

EARTH_RADIUS_KM = 6371.0


def haversine_km(a: Coordinates, b: Coordinates) -> float:
    d_lat = math.radians(b.latitude - a.latitude)
    d_lon = math.radians(b.longitude - a.longitude)
    h = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(a.latitude)) * math.cos(math.radians(b.latitude)) * math.sin(d_lon / 2) ** 2
    )
    return EARTH_RADIUS_KM * 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))


def distance_weight(distance_km: float, rules: BookingRules = DEFAULT_RULES) -> float:
    """1.0 inside the inner radius, 0.0 beyond the service radius, linear in between."""
    full = rules.weight_full_km
    cutoff = rules.service_radius_km
    if distance_km < full:
        return 1.0
    if distance_km > cutoff:
        return 0.0
    return 1 - (distance_km - full) / (cutoff - full)


def filter_slots_by_distance(
    slots: Sequence[TimeSlot],
    distance_km: float,
    rules: BookingRules = DEFAULT_RULES,
) -> list[TimeSlot]:
    weight = distance_weight(distance_km, rules)
    if weight == 0:
        return [replace(slot, available=False) for slot in slots]
    return [replace(slot, weight=weight) for slot in slots]


def rank_slots(slots: Sequence[TimeSlot]) -> list[TimeSlot]:
    """Available slots first, then by weight descending; unweighted slots sort last. Stable."""
    return sorted(
        slots,
        key=lambda slot: (
            not slot.available,
            -(slot.weight if slot.weight is not None else -1.0),
        ),
    )


def nearest_region(point: Coordinates) -> tuple[RegionId, float]:
    return min(
        ((region, haversine_km(point, center)) for region, center in REGION_CENTERS.items()),
        key=lambda item: item[1],
    )
