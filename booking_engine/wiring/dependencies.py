from functools import lru_cache
import logging

from booking_engine.core.config import settings
from booking_engine.application.ports.appointment_catalog import AppointmentCatalogPort
from booking_engine.application.ports.booking_store import BookingStorePort
from booking_engine.application.ports.geocoder import GeocoderPort
from booking_engine.application.ports.notifications import NotificationPort
from booking_engine.application.use_cases.admission import AdmissionUseCase
from booking_engine.application.use_cases.booking_effects import BookingEffects
from booking_engine.application.use_cases.region_resolver import RegionResolver
from booking_engine.application.utils.rate_limiter import RateLimiter
from booking_engine.infrastructure.catalog.appointment_catalog_store import AppointmentCatalogStore
from booking_engine.infrastructure.geocoding.google_geocoder import GoogleGeocoder
from booking_engine.infrastructure.geocoding.mock_geocoder import MockGeocoder
from booking_engine.infrastructure.notifications.log_notifier import LogNotifier
from booking_engine.infrastructure.store.memory_booking_store import MemoryBookingStore
from booking_engine.infrastructure.store.memory_draft_store import MemoryDraftStore


@lru_cache
def get_geocoder() -> GeocoderPort:
    logger = logging.getLogger(__name__)
    if settings.GEOCODER_PROVIDER.lower() == "google":
        if settings.GOOGLE_MAPS_API_KEY:
            logger.info("Using GoogleGeocoder")
            return GoogleGeocoder()
        if settings.ENV.lower() not in {"dev", "local"}:
            raise ValueError("GOOGLE_MAPS_API_KEY is required when GEOCODER_PROVIDER=google")
        logger.info("Using MockGeocoder (API key missing, ENV=dev/local)")
    return MockGeocoder()


@lru_cache
def get_region_resolver() -> RegionResolver:
    return RegionResolver(
        geocoder=get_geocoder(),
        rate_limiter=RateLimiter(min_interval_seconds=settings.GEOCODING_MIN_INTERVAL_MS / 1000),
        timeout_seconds=settings.GEOCODING_TIMEOUT_SECONDS,
    )


@lru_cache
def get_booking_store() -> BookingStorePort:
    return MemoryBookingStore()


@lru_cache
def get_appointment_catalog() -> AppointmentCatalogPort:
    return AppointmentCatalogStore()


@lru_cache
def get_notifier() -> NotificationPort:
    return LogNotifier()


@lru_cache
def get_draft_store() -> MemoryDraftStore:
    return MemoryDraftStore(subscribers=[BookingEffects(get_notifier())])


@lru_cache
def get_admission_use_case() -> AdmissionUseCase:
    return AdmissionUseCase(store=get_booking_store(), lead_time_hours=settings.MIN_BOOKING_HOURS)
