from __future__ import annotations

import logging
import math

from fastapi import APIRouter, Depends, HTTPException

from booking_engine.api.v1.schemas import (
    AdmitRequestSchema,
    AdmitResponseSchema,
    AllocationRequestSchema,
    BookingStateSchema,
    CustomerSchema,
    DetailsSchema,
    DispatchRequestSchema,
    OptimizeSlotsRequestSchema,
    OptimizeSlotsResponseSchema,
    ExistingBookingSchema,
    PaymentSchema,
    ResolveRegionRequestSchema,
    ResolveRegionResponseSchema,
    ScoredSlotSchema,
    ServiceSchema,
    Tier,
    TimeSlotSchema,
    ValidateSlotRequestSchema,
    ValidationResultSchema,
    WeighSlotsRequestSchema,
    WeighSlotsResponseSchema,
)
from booking_engine.application.ports.appointment_catalog import AppointmentCatalogPort
from booking_engine.application.use_cases.admission import AdmissionUseCase
from booking_engine.application.use_cases.allocation import check_allocation
from booking_engine.application.use_cases.booking_machine import booking_summary, is_in_progress
from booking_engine.application.use_cases.geo_weighting import (
    distance_weight,
    filter_slots_by_distance,
    rank_slots,
)
from booking_engine.application.use_cases.region_resolver import RegionResolver
from booking_engine.application.use_cases.slot_optimizer import optimize_slots
from booking_engine.application.use_cases.slot_validation import validate_slot
from booking_engine.domain.entities.appointment_type import AppointmentType
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
    BookingDetails,
    BookingState,
    CustomerInfo,
    PaymentDetails,
    ServiceSelection,
)
from booking_engine.domain.entities.existing_booking import ExistingBookingSnapshot
from booking_engine.domain.entities.time_slot import TimeSlot
from booking_engine.domain.entities.validation import ValidationResult
from booking_engine.infrastructure.store.memory_draft_store import MemoryDraftStore
from booking_engine.wiring.dependencies import (
    get_admission_use_case,
    get_appointment_catalog,
    get_draft_store,
    get_region_resolver,
)

router = APIRouter()
logger = logging.getLogger(__name__)


def _to_slot(schema: TimeSlotSchema) -> TimeSlot:
    return TimeSlot(
        id=schema.id,
        datetime=schema.datetime,
        available=schema.available,
        weight=schema.weight,
        duration=schema.duration,
    )


def _from_slot(slot: TimeSlot) -> TimeSlotSchema:
    return TimeSlotSchema(
        id=slot.id,
        datetime=slot.datetime,
        available=slot.available,
        weight=slot.weight,
        duration=slot.duration,
    )


def _to_booking(schema: ExistingBookingSchema) -> ExistingBookingSnapshot:
    return ExistingBookingSnapshot(datetime=schema.datetime, duration=schema.duration, type=schema.type)


def _result_schema(result: ValidationResult) -> ValidationResultSchema:
    return ValidationResultSchema(
        is_valid=result.is_valid,
        errors=list(result.errors),
        warnings=list(result.warnings),
        kind=result.kind.value if result.kind else None,
    )


def _lookup_appointment_type(
    catalog: AppointmentCatalogPort,
    appointment_type_id: str | None,
) -> AppointmentType | None:
    if not appointment_type_id:
        return None
    appointment_type = catalog.get_appointment_type(appointment_type_id)
    if appointment_type is None:
        raise HTTPException(status_code=404, detail=f"Unknown appointment type: {appointment_type_id}")
    return appointment_type


def build_action(req: DispatchRequestSchema) -> BookingAction:
    """Map a dispatch payload onto the action union. Raises ValueError on bad payloads."""
    try:
        action_type = ActionType(req.type.upper())
    except ValueError:
        raise ValueError(f"Unknown action type: {req.type}") from None

    match action_type:
        case ActionType.SELECT_SERVICE:
            if req.service is None:
                raise ValueError("SELECT_SERVICE requires 'service'")
            return SelectService(service=ServiceSelection(**req.service.model_dump()))
        case ActionType.SELECT_DATE:
            if req.date is None or req.time is None:
                raise ValueError("SELECT_DATE requires 'date' and 'time'")
            return SelectDate(date=req.date, time=req.time, warnings=tuple(req.warnings))
        case ActionType.UPDATE_DETAILS:
            if req.details is None:
                raise ValueError("UPDATE_DETAILS requires 'details'")
            user = req.details.user
            return UpdateDetails(
                details=BookingDetails(
                    user=CustomerInfo(**user.model_dump()) if user else None,
                    address=req.details.address,
                    notes=req.details.notes,
                )
            )
        case ActionType.CONFIRM:
            return Confirm()
        case ActionType.PROCESS_PAYMENT:
            if req.payment is None:
                raise ValueError("PROCESS_PAYMENT requires 'payment'")
            return ProcessPayment(payment=PaymentDetails(**req.payment.model_dump()))
        case ActionType.COMPLETE:
            return Complete()
        case ActionType.CANCEL:
            return Cancel(reason=req.reason)
        case ActionType.RETRY:
            return Retry()
        case ActionType.RESET:
            return Reset()
    raise ValueError(f"Unhandled action type: {action_type}")


def state_schema(draft_id: str, state: BookingState) -> BookingStateSchema:
    details = None
    if state.details is not None:
        user = state.details.user
        details = DetailsSchema(
            user=CustomerSchema(
                first_name=user.first_name,
                last_name=user.last_name,
                email=user.email,
                phone=user.phone,
            )
            if user
            else None,
            address=state.details.address,
            notes=state.details.notes,
        )
    return BookingStateSchema(
        draft_id=draft_id,
        status=state.status.value,
        service=ServiceSchema(**vars(state.service)) if state.service else None,
        date=state.date,
        time=state.time,
        details=details,
        payment=PaymentSchema(**vars(state.payment)) if state.payment else None,
        error=state.error,
        warnings=list(state.warnings),
        last_action=state.last_action.value if state.last_action else None,
        in_progress=is_in_progress(state),
        summary=booking_summary(state),
    )


@router.post("/slots/validate", response_model=ValidationResultSchema)
def validate_slot_endpoint(
    req: ValidateSlotRequestSchema,
    catalog: AppointmentCatalogPort = Depends(get_appointment_catalog),
):
    appointment_type = _lookup_appointment_type(catalog, req.appointment_type_id)
    result = validate_slot(
        _to_slot(req.slot),
        req.tier is Tier.amc,
        [_to_booking(b) for b in req.existing_bookings],
        appointment_type,
        now=req.now,
    )
    return _result_schema(result)


@router.post("/allocation/check", response_model=ValidationResultSchema)
def check_allocation_endpoint(req: AllocationRequestSchema):
    result = check_allocation(req.tier is Tier.amc, req.amc_count, req.regular_count, req.total_cap)
    return _result_schema(result)


@router.post("/slots/weigh", response_model=WeighSlotsResponseSchema)
def weigh_slots_endpoint(req: WeighSlotsRequestSchema):
    slots = filter_slots_by_distance([_to_slot(s) for s in req.slots], req.distance_km)
    if req.rank:
        slots = rank_slots(slots)
    return WeighSlotsResponseSchema(
        weight=distance_weight(req.distance_km),
        slots=[_from_slot(s) for s in slots],
    )


@router.post("/slots/optimize", response_model=OptimizeSlotsResponseSchema)
def optimize_slots_endpoint(
    req: OptimizeSlotsRequestSchema,
    catalog: AppointmentCatalogPort = Depends(get_appointment_catalog),
):
    appointment_type = _lookup_appointment_type(catalog, req.appointment_type_id)
    slots = [_to_slot(s) for s in req.slots]
    if req.distance_km is not None:
        slots = filter_slots_by_distance(slots, req.distance_km)
    scored = optimize_slots(
        req.day,
        slots,
        [_to_booking(b) for b in req.existing_bookings],
        is_amc=req.tier is Tier.amc,
        appointment_type=appointment_type,
        holidays=set(req.holidays),
    )
    return OptimizeSlotsResponseSchema(
        slots=[ScoredSlotSchema(slot=_from_slot(item.slot), score=item.score) for item in scored]
    )


@router.post("/regions/resolve", response_model=ResolveRegionResponseSchema)
async def resolve_region_endpoint(
    req: ResolveRegionRequestSchema,
    resolver: RegionResolver = Depends(get_region_resolver),
):
    resolution = await resolver.resolve_region(req.address)
    return ResolveRegionResponseSchema(
        region=resolution.region,
        distance_km=resolution.distance_km if math.isfinite(resolution.distance_km) else None,
        within_radius=resolution.within_radius,
    )


@router.post("/bookings/admit", response_model=AdmitResponseSchema)
def admit_booking_endpoint(
    req: AdmitRequestSchema,
    admission: AdmissionUseCase = Depends(get_admission_use_case),
    catalog: AppointmentCatalogPort = Depends(get_appointment_catalog),
):
    appointment_type = _lookup_appointment_type(catalog, req.appointment_type_id)
    outcome = admission.admit(_to_slot(req.slot), req.tier is Tier.amc, appointment_type)
    return AdmitResponseSchema(
        day=outcome.day,
        result=_result_schema(outcome.result),
        admitted=outcome.booking is not None,
    )


@router.post("/drafts/{draft_id}/dispatch", response_model=BookingStateSchema)
def dispatch_endpoint(
    draft_id: str,
    req: DispatchRequestSchema,
    drafts: MemoryDraftStore = Depends(get_draft_store),
):
    try:
        action = build_action(req)
    except ValueError as e:
        logger.warning("Rejected dispatch payload", extra={"draft_id": draft_id, "reason": str(e)})
        raise HTTPException(status_code=400, detail=str(e))

    machine = drafts.get_or_create(draft_id)
    state = machine.dispatch(action)
    return state_schema(draft_id, state)


@router.get("/drafts/{draft_id}", response_model=BookingStateSchema)
def get_draft_endpoint(
    draft_id: str,
    drafts: MemoryDraftStore = Depends(get_draft_store),
):
    machine = drafts.get(draft_id)
    if machine is None:
        raise HTTPException(status_code=404, detail="Draft not found")
    return state_schema(draft_id, machine.state)
