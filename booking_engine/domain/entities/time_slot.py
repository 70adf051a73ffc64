from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class TimeSlot:
    id: str
    datetime: datetime
    available: bool = True
    weight: float | None = None  # 0..1, attached by distance weighting
    duration: int | None = None  # minutes, when the availability feed supplies it
