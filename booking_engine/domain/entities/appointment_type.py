from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class AppointmentType:
    id: str
    name: str
    duration: int  # minutes
    is_amc: bool = False
    price: float | None = None

    def __post_init__(self) -> None:
        if self.duration <= 0:
            raise ValueError(f"Appointment type {self.id!r} must have a positive duration")
