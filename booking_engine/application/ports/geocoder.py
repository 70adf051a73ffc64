from __future__ import annotations

from abc import ABC, abstractmethod

from booking_engine.domain.entities.geo import Coordinates


class GeocoderPort(ABC):
    @abstractmethod
    async def geocode(self, address: str) -> Coordinates:
        """
        Resolve a free-form address to coordinates.

        Raises:
            GeocodingRateLimitedError: provider quota exceeded
            GeocodingZeroResultsError: no match for the address
            GeocodingError: any other provider or transport failure
        """
        raise NotImplementedError
