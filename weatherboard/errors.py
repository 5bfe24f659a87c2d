"""Error types raised while fetching and displaying weather."""


class WeatherboardError(Exception):
    """Base class for dashboard errors."""


class ConfigurationError(WeatherboardError):
    """Raised before any request when the API credential is missing."""


class UpstreamError(WeatherboardError):
    """Non-success HTTP response from the weather API."""

    def __init__(self, status_code: int, body: str = ""):
        self.status_code = status_code
        self.body = body
        super().__init__(f"{status_code}: {body}")


class NotFoundError(UpstreamError):
    """The weather API has no match for the requested location."""


class GeolocationError(WeatherboardError):
    PERMISSION_DENIED = "permission_denied"
    POSITION_UNAVAILABLE = "position_unavailable"
    TIMEOUT = "timeout"

    def __init__(self, code: str, message: str = ""):
        self.code = code
        self.message = message
        super().__init__(f"{code}: {message}" if message else code)
