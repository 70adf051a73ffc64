from __future__ import annotations

from abc import ABC, abstractmethod

from booking_engine.domain.entities.appointment_type import AppointmentType


class AppointmentCatalogPort(ABC):
    @abstractmethod
    def get_appointment_type(self, appointment_type_id: str) -> AppointmentType | None:
        """Get appointment type by id."""
        raise NotImplementedError

    @abstractmethod
    def list_appointment_types(self) -> list[AppointmentType]:
        raise NotImplementedError
