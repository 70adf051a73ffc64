from __future__ import annotations

import logging

import httpx

from booking_engine.application.exceptions import (
    GeocodingError,
    GeocodingRateLimitedError,
    GeocodingZeroResultsError,
)
from booking_engine.application.ports.geocoder import GeocoderPort
from booking_engine.core.config import settings
from booking_engine.domain.entities.geo import Coordinates


class GoogleGeocoder(GeocoderPort):
    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        client: httpx.AsyncClient | None = None,
        region_bias: str = "sg",
    ) -> None:
        self._api_key = api_key or settings.GOOGLE_MAPS_API_KEY
        self._base_url = base_url or settings.GOOGLE_GEOCODE_URL
        self._client = client or httpx.AsyncClient(timeout=settings.GEOCODING_TIMEOUT_SECONDS)
        self._region_bias = region_bias
        self._logger = logging.getLogger(__name__)

        if not self._api_key:
            raise ValueError("GOOGLE_MAPS_API_KEY is required for Google geocoding")

    async def geocode(self, address: str) -> Coordinates:
        params = {"address": address, "key": self._api_key, "region": self._region_bias}
        try:
            response = await self._client.get(self._base_url, params=params)
        except httpx.HTTPError as e:
            self._logger.error("Geocoding request failed", extra={"error": str(e)})
            raise GeocodingError(f"Geocoding request failed: {e}") from e

        if response.status_code == 429:
            raise GeocodingRateLimitedError("Geocoding rate limit exceeded")
        if response.status_code >= 400:
            self._logger.error(
                "Geocoding HTTP error",
                extra={"status": response.status_code, "body": response.text[:200]},
            )
            raise GeocodingError(f"Geocoding HTTP error: {response.status_code}")

        try:
            data = response.json()
        except ValueError as e:
            raise GeocodingError("Geocoding response is not valid JSON") from e

        status = data.get("status")
        if status == "OVER_QUERY_LIMIT":
            raise GeocodingRateLimitedError("Geocoding rate limit exceeded")
        if status == "ZERO_RESULTS":
            raise GeocodingZeroResultsError(f"No results for address: {address}")
        if status != "OK":
            raise GeocodingError(f"Geocoding failed with status {status}: {data.get('error_message', '')}".strip())

        try:
            location = data["results"][0]["geometry"]["location"]
            return Coordinates(latitude=float(location["lat"]), longitude=float(location["lng"]))
        except (KeyError, IndexError, TypeError, ValueError) as e:
            raise GeocodingError("Geocoding response missing location") from e

    async def aclose(self) -> None:
        await self._client.aclose()
