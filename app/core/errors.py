class WeatherServiceError(Exception):
    """
    Base class for classified errors surfaced to API callers.

    Each subclass carries the HTTP status code and a caller-safe message.
    Messages never contain raw provider bodies or the API key.
    """

    status_code: int = 500
    default_message: str = "Internal error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidInput(WeatherServiceError):
    status_code = 400
    default_message = "Invalid request"


class ConfigurationError(WeatherServiceError):
    status_code = 500
    default_message = "Weather API is not configured"


class Unauthorized(ConfigurationError):
    """The provider rejected the configured API key."""

    default_message = "Invalid API key"


class NotFound(WeatherServiceError):
    status_code = 404
    default_message = "Location not found"


class UpstreamError(WeatherServiceError):
    status_code = 500
    default_message = "Failed to fetch weather data"


class MalformedUpstreamPayload(UpstreamError):
    default_message = "Unexpected response from weather provider"
