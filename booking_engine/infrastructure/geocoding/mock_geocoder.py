from __future__ import annotations

import logging

from booking_engine.application.exceptions import GeocodingZeroResultsError
from booking_engine.application.ports.geocoder import GeocoderPort
from booking_engine.domain.entities.geo import Coordinates

KNOWN_ADDRESSES: dict[str, Coordinates] = {
    "1 jurong west central 2, singapore 648886": Coordinates(1.3397, 103.7067),
    "30 woodlands avenue 2, singapore 738343": Coordinates(1.4360, 103.7865),
    "2 orchard turn, singapore 238801": Coordinates(1.3040, 103.8318),
    "1 hougang street 91, singapore 538692": Coordinates(1.3748, 103.8794),
    "4 tampines central 5, singapore 529510": Coordinates(1.3526, 103.9447),
    "1 pulau ubin, singapore 508532": Coordinates(1.4044, 103.9625),
}


class MockGeocoder(GeocoderPort):
    def __init__(self, addresses: dict[str, Coordinates] | None = None) -> None:
        self._addresses = {k.lower().strip(): v for k, v in (addresses or KNOWN_ADDRESSES).items()}
        self._logger = logging.getLogger(__name__)

    async def geocode(self, address: str) -> Coordinates:
        point = self._addresses.get(address.lower().strip())
        if point is None:
            raise GeocodingZeroResultsError(f"No results for address: {address}")
        self._logger.info("Mock geocode", extra={"latitude": point.latitude, "longitude": point.longitude})
        return point
