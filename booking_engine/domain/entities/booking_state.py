from __future__ import annotations

from dataclasses import dataclass
from datetime import date, time
from enum import Enum

from booking_engine.domain.entities.booking_action import ActionType


class BookingStatus(str, Enum):
    IDLE = "IDLE"
    SELECTING_DATE = "SELECTING_DATE"
    ENTERING_DETAILS = "ENTERING_DETAILS"
    CONFIRMING = "CONFIRMING"
    PROCESSING_PAYMENT = "PROCESSING_PAYMENT"
    CONFIRMED = "CONFIRMED"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"
    ERROR = "ERROR"


TERMINAL_STATUSES = frozenset({BookingStatus.COMPLETED, BookingStatus.CANCELLED})


@dataclass(frozen=True)
class ServiceSelection:
    id: str
    name: str
    duration: int | None = None
    is_amc: bool = False
    price: float | None = None


@dataclass(frozen=True)
class CustomerInfo:
    first_name: str
    last_name: str
    email: str | None = None
    phone: str | None = None


@dataclass(frozen=True)
class BookingDetails:
    user: CustomerInfo | None = None
    address: str | None = None
    notes: str | None = None


@dataclass(frozen=True)
class PaymentDetails:
    amount: float | None = None
    currency: str | None = None
    method: str | None = None
    reference: str | None = None


@dataclass(frozen=True)
class BookingState:
    status: BookingStatus = BookingStatus.IDLE
    service: ServiceSelection | None = None
    date: date | None = None
    time: time | None = None
    details: BookingDetails | None = None
    payment: PaymentDetails | None = None
    error: str | None = None
    warnings: tuple[str, ...] = ()
    last_action: ActionType | None = None  # routes RETRY after a failure
