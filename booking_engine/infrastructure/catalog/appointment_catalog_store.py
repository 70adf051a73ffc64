from __future__ import annotations

from booking_engine.application.ports.appointment_catalog import AppointmentCatalogPort
from booking_engine.domain.entities.appointment_type import AppointmentType
from booking_engine.infrastructure.catalog.appointment_catalog_data import APPOINTMENT_CATALOG


class AppointmentCatalogStore(AppointmentCatalogPort):
    def __init__(self, catalog: dict[str, AppointmentType] | None = None) -> None:
        self._catalog = catalog or APPOINTMENT_CATALOG

    def get_appointment_type(self, appointment_type_id: str) -> AppointmentType | None:
        normalized_key = appointment_type_id.lower().strip()
        return self._catalog.get(normalized_key)

    def list_appointment_types(self) -> list[AppointmentType]:
        return list(self._catalog.values())
