from __future__ import annotations

import asyncio
import logging

from booking_engine.application.exceptions import (
    GeocodingError,
    GeocodingRateLimitedError,
    GeocodingZeroResultsError,
)
from booking_engine.application.ports.geocoder import GeocoderPort
from booking_engine.application.use_cases.geo_weighting import nearest_region
from booking_engine.application.utils.rate_limiter import RateLimiter
from booking_engine.application.utils.region_classifier import region_hint
from booking_engine.domain.entities.geo import RegionResolution
from booking_engine.domain.rules import DEFAULT_RULES, BookingRules


class RegionResolver:
    """
    Resolves an address to its nearest service region.

    Geocoding failures never leave this class: they come back as an
    unresolved ``RegionResolution``.
    """

    def __init__(
        self,
        geocoder: GeocoderPort,
        rate_limiter: RateLimiter | None = None,
        timeout_seconds: float | None = 10.0,
        rules: BookingRules = DEFAULT_RULES,
    ) -> None:
        self._geocoder = geocoder
        self._rate_limiter = rate_limiter or RateLimiter()
        self._timeout_seconds = timeout_seconds
        self._rules = rules
        self._logger = logging.getLogger(__name__)

    @property
    def rate_limiter(self) -> RateLimiter:
        return self._rate_limiter

    async def resolve_region(self, address: str) -> RegionResolution:
        if not address or not address.strip():
            return RegionResolution.unresolved()

        try:
            await self._rate_limiter.acquire()
            if self._timeout_seconds is None:
                point = await self._geocoder.geocode(address)
            else:
                point = await asyncio.wait_for(self._geocoder.geocode(address), self._timeout_seconds)
        except GeocodingRateLimitedError:
            self._log_failure(address, "rate_limited")
            return RegionResolution.unresolved()
        except GeocodingZeroResultsError:
            self._log_failure(address, "zero_results")
            return RegionResolution.unresolved()
        except asyncio.TimeoutError:
            self._log_failure(address, "timeout")
            return RegionResolution.unresolved()
        except GeocodingError as e:
            self._log_failure(address, str(e) or "geocoding_error")
            return RegionResolution.unresolved()
        except Exception as e:
            self._logger.exception("Unexpected geocoder failure", extra={"error": str(e)})
            return RegionResolution.unresolved()

        region, distance = nearest_region(point)
        within = distance <= self._rules.service_radius_km
        self._logger.info(
            "Region resolved",
            extra={"region": region.value, "distance_km": round(distance, 3), "within_radius": within},
        )
        return RegionResolution(region=region, distance_km=distance, within_radius=within)

    async def resolve_many(self, addresses: list[str]) -> list[RegionResolution]:
        """Resolve addresses one after another so the rate limit is respected."""
        results: list[RegionResolution] = []
        for address in addresses:
            results.append(await self.resolve_region(address))
        return results

    def _log_failure(self, address: str, reason: str) -> None:
        hint = region_hint(address)
        self._logger.warning(
            "Geocoding failed",
            extra={"reason": reason, "region_hint": hint.value if hint else None},
        )
