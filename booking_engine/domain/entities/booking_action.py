"""
Booking lifecycle actions.

One frozen dataclass per action name. ``BookingAction`` is the closed union
accepted by the reducer.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, time
from enum import Enum
from typing import TYPE_CHECKING, ClassVar, Union

if TYPE_CHECKING:
    from booking_engine.domain.entities.booking_state import (
        BookingDetails,
        PaymentDetails,
        ServiceSelection,
    )


class ActionType(str, Enum):
    SELECT_SERVICE = "SELECT_SERVICE"
    SELECT_DATE = "SELECT_DATE"
    UPDATE_DETAILS = "UPDATE_DETAILS"
    CONFIRM = "CONFIRM"
    PROCESS_PAYMENT = "PROCESS_PAYMENT"
    COMPLETE = "COMPLETE"
    CANCEL = "CANCEL"
    RETRY = "RETRY"
    RESET = "RESET"


@dataclass(frozen=True)
class SelectService:
    type: ClassVar[ActionType] = ActionType.SELECT_SERVICE
    service: "ServiceSelection"


@dataclass(frozen=True)
class SelectDate:
    type: ClassVar[ActionType] = ActionType.SELECT_DATE
    date: date
    time: time
    warnings: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class UpdateDetails:
    type: ClassVar[ActionType] = ActionType.UPDATE_DETAILS
    details: "BookingDetails"


@dataclass(frozen=True)
class Confirm:
    type: ClassVar[ActionType] = ActionType.CONFIRM


@dataclass(frozen=True)
class ProcessPayment:
    type: ClassVar[ActionType] = ActionType.PROCESS_PAYMENT
    payment: "PaymentDetails"


@dataclass(frozen=True)
class Complete:
    type: ClassVar[ActionType] = ActionType.COMPLETE


@dataclass(frozen=True)
class Cancel:
    type: ClassVar[ActionType] = ActionType.CANCEL
    reason: str | None = None


@dataclass(frozen=True)
class Retry:
    type: ClassVar[ActionType] = ActionType.RETRY


@dataclass(frozen=True)
class Reset:
    type: ClassVar[ActionType] = ActionType.RESET


BookingAction = Union[
    SelectService,
    SelectDate,
    UpdateDetails,
    Confirm,
    ProcessPayment,
    Complete,
    Cancel,
    Retry,
    Reset,
]
