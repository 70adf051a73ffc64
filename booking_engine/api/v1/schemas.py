from __future__ import annotations

from datetime import date as Date
from datetime import datetime as DateTime
from datetime import time as Time
from enum import Enum

from pydantic import BaseModel, Field

from booking_engine.domain.entities.geo import RegionId


class Tier(str, Enum):
    amc = "amc"
    regular = "regular"


class TimeSlotSchema(BaseModel):
    id: str
    datetime: DateTime
    available: bool = True
    weight: float | None = None
    duration: int | None = Field(default=None, gt=0)


class ExistingBookingSchema(BaseModel):
    datetime: DateTime
    duration: int = Field(gt=0)
    type: str = "regular"


class ValidationResultSchema(BaseModel):
    is_valid: bool
    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    kind: str | None = None


class ValidateSlotRequestSchema(BaseModel):
    slot: TimeSlotSchema
    tier: Tier = Tier.regular
    existing_bookings: list[ExistingBookingSchema] = Field(default_factory=list)
    appointment_type_id: str | None = None
    now: DateTime | None = None


class AllocationRequestSchema(BaseModel):
    tier: Tier = Tier.regular
    amc_count: int = Field(ge=0)
    regular_count: int = Field(ge=0)
    total_cap: int = Field(default=6, gt=0)


class WeighSlotsRequestSchema(BaseModel):
    slots: list[TimeSlotSchema]
    distance_km: float = Field(ge=0)
    rank: bool = False


class WeighSlotsResponseSchema(BaseModel):
    weight: float
    slots: list[TimeSlotSchema]


class ResolveRegionRequestSchema(BaseModel):
    address: str


class ResolveRegionResponseSchema(BaseModel):
    region: RegionId | None
    distance_km: float | None  # null when unresolved (JSON has no Infinity)
    within_radius: bool


class AdmitRequestSchema(BaseModel):
    slot: TimeSlotSchema
    tier: Tier = Tier.regular
    appointment_type_id: str | None = None


class AdmitResponseSchema(BaseModel):
    day: Date
    result: ValidationResultSchema
    admitted: bool


class ServiceSchema(BaseModel):
    id: str
    name: str
    duration: int | None = Field(default=None, gt=0)
    is_amc: bool = False
    price: float | None = None


class CustomerSchema(BaseModel):
    first_name: str
    last_name: str
    email: str | None = None
    phone: str | None = None


class DetailsSchema(BaseModel):
    user: CustomerSchema | None = None
    address: str | None = None
    notes: str | None = None


class PaymentSchema(BaseModel):
    amount: float | None = None
    currency: str | None = None
    method: str | None = None
    reference: str | None = None


class DispatchRequestSchema(BaseModel):
    type: str
    service: ServiceSchema | None = None
    date: Date | None = None
    time: Time | None = None
    warnings: list[str] = Field(default_factory=list)
    details: DetailsSchema | None = None
    payment: PaymentSchema | None = None
    reason: str | None = None


class BookingStateSchema(BaseModel):
    draft_id: str
    status: str
    service: ServiceSchema | None = None
    date: Date | None = None
    time: Time | None = None
    details: DetailsSchema | None = None
    payment: PaymentSchema | None = None
    error: str | None = None
    warnings: list[str] = Field(default_factory=list)
    last_action: str | None = None
    in_progress: bool = False
    summary: str = ""


class OptimizeSlotsRequestSchema(BaseModel):
    day: Date
    slots: list[TimeSlotSchema]
    existing_bookings: list[ExistingBookingSchema] = Field(default_factory=list)
    tier: Tier = Tier.regular
    appointment_type_id: str | None = None
    holidays: list[Date] = Field(default_factory=list)
    distance_km: float | None = Field(default=None, ge=0)


class ScoredSlotSchema(BaseModel):
    slot: TimeSlotSchema
    score: float


class OptimizeSlotsResponseSchema(BaseModel):
    slots: list[ScoredSlotSchema]
