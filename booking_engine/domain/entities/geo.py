from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Mapping


@dataclass(frozen=True)
class Coordinates:
    latitude: float
    longitude: float


class RegionId(str, Enum):
    WEST = "west"
    NORTH = "north"
    CENTRAL = "central"
    NORTHEAST = "northeast"
    EAST = "east"


REGION_CENTERS: Mapping[RegionId, Coordinates] = MappingProxyType(
    {
        RegionId.WEST: Coordinates(1.3329, 103.7436),
        RegionId.NORTH: Coordinates(1.4291, 103.8354),
        RegionId.CENTRAL: Coordinates(1.3048, 103.8318),
        RegionId.NORTHEAST: Coordinates(1.3721, 103.8931),
        RegionId.EAST: Coordinates(1.3236, 103.9273),
    }
)


@dataclass(frozen=True)
class RegionResolution:
    region: RegionId | None
    distance_km: float
    within_radius: bool

    @classmethod
    def unresolved(cls) -> "RegionResolution":
        return cls(region=None, distance_km=math.inf, within_radius=False)
