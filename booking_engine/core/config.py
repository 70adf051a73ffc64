from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"

    BUSINESS_NAME: str = "Home Services"
    BUSINESS_TIMEZONE: str = "Asia/Singapore"
    MIN_BOOKING_HOURS: int = 24

    GEOCODER_PROVIDER: str = "mock"  # "mock" | "google"
    GOOGLE_MAPS_API_KEY: str | None = None
    GOOGLE_GEOCODE_URL: str = "https://maps.googleapis.com/maps/api/geocode/json"
    GEOCODING_MIN_INTERVAL_MS: int = 100
    GEOCODING_TIMEOUT_SECONDS: float = 10.0


settings = Settings()
