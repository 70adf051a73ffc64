from __future__ import annotations

from booking_engine.domain.entities.appointment_type import AppointmentType
from booking_engine.domain.rules import SLOT_DURATION

APPOINTMENT_CATALOG: dict[str, AppointmentType] = {
    "amc_servicing": AppointmentType(
        id="amc_servicing",
        name="AMC Aircon Servicing",
        duration=SLOT_DURATION["AMC"],
        is_amc=True,
    ),
    "general_servicing": AppointmentType(
        id="general_servicing",
        name="General Aircon Servicing",
        duration=SLOT_DURATION["REGULAR"],
        price=50.0,
    ),
    "chemical_wash": AppointmentType(
        id="chemical_wash",
        name="Chemical Wash",
        duration=SLOT_DURATION["REGULAR"],
        price=80.0,
    ),
    "chemical_overhaul": AppointmentType(
        id="chemical_overhaul",
        name="Chemical Overhaul",
        duration=SLOT_DURATION["REPAIR"],
        price=150.0,
    ),
    "repair_diagnostic": AppointmentType(
        id="repair_diagnostic",
        name="Repair Diagnostic",
        duration=SLOT_DURATION["REPAIR"],
        price=60.0,
    ),
    "gas_leakage_check": AppointmentType(
        id="gas_leakage_check",
        name="Gas Check & Leakage Repair",
        duration=SLOT_DURATION["REGULAR"],
        price=70.0,
    ),
}
