from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta

AMC_TYPE = "amc"
REGULAR_TYPE = "regular"


@dataclass(frozen=True)
class ExistingBookingSnapshot:
    datetime: datetime
    duration: int  # minutes
    type: str = REGULAR_TYPE  # "amc" or anything else (regular)

    @property
    def is_amc(self) -> bool:
        return self.type == AMC_TYPE

    @property
    def end(self) -> datetime:
        return self.datetime + timedelta(minutes=self.duration)
