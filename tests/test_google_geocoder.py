"""
Tests for the Google geocoding adapter against a mocked HTTP transport.
"""

from __future__ import annotations

import asyncio

import httpx
import pytest

from booking_engine.application.exceptions import (
    GeocodingError,
    GeocodingRateLimitedError,
    GeocodingZeroResultsError,
)
from booking_engine.core.config import settings
from booking_engine.domain.entities.geo import Coordinates
from booking_engine.infrastructure.geocoding.google_geocoder import GoogleGeocoder

URL = "https://geocode.test/json"


def _geocode(handler, address: str = "2 Orchard Turn, Singapore 238801"):
    async def run():
        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        geocoder = GoogleGeocoder(api_key="test-key", base_url=URL, client=client)
        try:
            return await geocoder.geocode(address)
        finally:
            await geocoder.aclose()

    return asyncio.run(run())


def test_ok_response():
    """Test that an OK response yields coordinates."""
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen.update(request.url.params)
        return httpx.Response(
            200,
            json={"status": "OK", "results": [{"geometry": {"location": {"lat": 1.304, "lng": 103.8318}}}]},
        )

    point = _geocode(handler)

    assert point == Coordinates(1.304, 103.8318)
    assert seen["key"] == "test-key"
    assert seen["region"] == "sg"
    assert seen["address"] == "2 Orchard Turn, Singapore 238801"


@pytest.mark.parametrize(
    "response, error",
    [
        (httpx.Response(200, json={"status": "ZERO_RESULTS", "results": []}), GeocodingZeroResultsError),
        (httpx.Response(200, json={"status": "OVER_QUERY_LIMIT"}), GeocodingRateLimitedError),
        (httpx.Response(429, text="slow down"), GeocodingRateLimitedError),
        (httpx.Response(500, text="oops"), GeocodingError),
        (httpx.Response(200, json={"status": "REQUEST_DENIED", "error_message": "bad key"}), GeocodingError),
        (httpx.Response(200, json={"status": "OK", "results": []}), GeocodingError),
        (httpx.Response(200, text="not json"), GeocodingError),
    ],
)
def test_error_responses(response, error):
    """Test that API error statuses map to geocoding errors."""
    with pytest.raises(error):
        _geocode(lambda request: response)


def test_transport_failure():
    """Test that a transport failure raises a geocoding error."""
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("unreachable", request=request)

    with pytest.raises(GeocodingError):
        _geocode(handler)


def test_missing_api_key(monkeypatch):
    """Test that a missing API key is refused."""
    monkeypatch.setattr(settings, "GOOGLE_MAPS_API_KEY", None)

    with pytest.raises(ValueError):
        GoogleGeocoder(api_key=None, client=httpx.AsyncClient())
