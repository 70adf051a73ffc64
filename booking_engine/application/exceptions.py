class GeocodingError(RuntimeError):
    """Raised when the geocoding provider fails (network errors, bad responses, timeouts)."""
    pass


class GeocodingRateLimitedError(GeocodingError):
    """Raised when the geocoding provider rejects a request for exceeding its quota."""
    pass


class GeocodingZeroResultsError(GeocodingError):
    """Raised when the geocoding provider finds no match for an address."""
    pass
