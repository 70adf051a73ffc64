"""
Booking lifecycle state machine.

``transition`` is a pure reducer: ``(state, action) -> state``. Every field
of the returned state is rebuilt; a failed guard keeps the prior fields and
only sets ``status=ERROR`` and ``error``. ``BookingMachine`` owns a single
draft, serializes dispatches and notifies subscribers after each transition.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import replace
from typing import Callable

from booking_engine.domain.entities.booking_action import (
    ActionType,
    BookingAction,
    Cancel,
    Complete,
    Confirm,
    ProcessPayment,
    Reset,
    Retry,
    SelectDate,
    SelectService,
    UpdateDetails,
)
from booking_engine.domain.entities.booking_state import (
    TERMINAL_STATUSES,
    BookingState,
    BookingStatus,
)

MUST_SELECT_SERVICE = "Must select service first"
MUST_SELECT_SERVICE_AND_DATE = "Must select service and date first"
MISSING_DETAILS = "Missing required details"
INVALID_PAYMENT_STATE = "Invalid state for payment processing"
MUST_BE_CONFIRMED = "Booking must be confirmed first"

Subscriber = Callable[[BookingState, BookingState, BookingAction], None]


def has_schedule(state: BookingState) -> bool:
    return bool(state.service and state.date and state.time)


def has_required_details(state: BookingState) -> bool:
    return bool(has_schedule(state) and state.details and state.details.user)


def has_payment_details(state: BookingState) -> bool:
    payment = state.payment
    return bool(payment and payment.amount and payment.currency and payment.method)


def is_in_progress(state: BookingState) -> bool:
    return state.status is not BookingStatus.IDLE and state.status not in TERMINAL_STATUSES


def booking_summary(state: BookingState) -> str:
    parts: list[str] = []
    if state.service:
        parts.append(f"Service: {state.service.name}")
    if state.date and state.time:
        when = f"{state.date:%A, %B} {state.date.day}, {state.date.year} at {state.time:%I:%M %p}"
        parts.append(f"Time: {when}")
    if state.details and state.details.user:
        parts.append(f"Customer: {state.details.user.first_name} {state.details.user.last_name}")
    if state.payment and state.payment.amount is not None:
        parts.append(f"Payment: {state.payment.amount} {state.payment.currency or ''}".rstrip())
    return "\n".join(parts)


def _fail(state: BookingState, action: BookingAction, message: str) -> BookingState:
    return replace(state, status=BookingStatus.ERROR, error=message, last_action=action.type)


def transition(state: BookingState, action: BookingAction) -> BookingState:
    match action:
        case SelectService(service=service):
            return replace(
                state,
                status=BookingStatus.SELECTING_DATE,
                service=service,
                error=None,
                last_action=action.type,
            )

        case SelectDate(date=day, time=at, warnings=warnings):
            if state.status is BookingStatus.IDLE and state.service is None:
                return _fail(state, action, MUST_SELECT_SERVICE)
            return replace(
                state,
                status=BookingStatus.ENTERING_DETAILS,
                date=day,
                time=at,
                warnings=tuple(warnings),
                error=None,
                last_action=action.type,
            )

        case UpdateDetails(details=details):
            if not has_schedule(state):
                return _fail(state, action, MUST_SELECT_SERVICE_AND_DATE)
            return replace(
                state,
                status=BookingStatus.CONFIRMING,
                details=details,
                error=None,
                last_action=action.type,
            )

        case Confirm():
            if not has_schedule(state) or state.details is None:
                return _fail(state, action, MISSING_DETAILS)
            return replace(
                state,
                status=BookingStatus.PROCESSING_PAYMENT,
                error=None,
                last_action=action.type,
            )

        case ProcessPayment(payment=payment):
            if state.status not in (BookingStatus.PROCESSING_PAYMENT, BookingStatus.ERROR):
                return _fail(state, action, INVALID_PAYMENT_STATE)
            return replace(
                state,
                status=BookingStatus.CONFIRMED,
                payment=payment,
                error=None,
                last_action=action.type,
            )

        case Complete():
            if state.status is not BookingStatus.CONFIRMED:
                return _fail(state, action, MUST_BE_CONFIRMED)
            return replace(state, status=BookingStatus.COMPLETED, error=None, last_action=action.type)

        case Cancel():
            return replace(state, status=BookingStatus.CANCELLED, error=None, last_action=action.type)

        case Retry():
            if state.status is not BookingStatus.ERROR:
                return state
            if state.last_action is ActionType.PROCESS_PAYMENT:
                target = BookingStatus.PROCESSING_PAYMENT
            else:
                target = BookingStatus.CONFIRMING
            return replace(state, status=target, error=None, last_action=action.type)

        case Reset():
            return BookingState()

    raise TypeError(f"Unknown booking action: {action!r}")


class BookingMachine:
    def __init__(self, draft_id: str, initial: BookingState | None = None) -> None:
        self._draft_id = draft_id
        self._state = initial or BookingState()
        self._subscribers: list[Subscriber] = []
        self._lock = threading.Lock()
        self._logger = logging.getLogger(__name__)

    @property
    def draft_id(self) -> str:
        return self._draft_id

    @property
    def state(self) -> BookingState:
        return self._state

    def subscribe(self, subscriber: Subscriber) -> Callable[[], None]:
        self._subscribers.append(subscriber)

        def unsubscribe() -> None:
            if subscriber in self._subscribers:
                self._subscribers.remove(subscriber)

        return unsubscribe

    def dispatch(self, action: BookingAction) -> BookingState:
        with self._lock:
            previous = self._state
            current = transition(previous, action)
            self._state = current

        self._logger.info(
            "Booking transition",
            extra={
                "draft_id": self._draft_id,
                "action": action.type.value,
                "status": current.status.value,
                "reason": current.error,
            },
        )
        for subscriber in list(self._subscribers):
            try:
                subscriber(previous, current, action)
            except Exception as e:
                self._logger.exception(
                    "Booking subscriber failed", extra={"draft_id": self._draft_id, "error": str(e)}
                )
        return current

    def reset(self) -> BookingState:
        return self.dispatch(Reset())
