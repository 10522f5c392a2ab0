"""Error taxonomy of the weather batch pipeline."""
from __future__ import annotations

from typing import Optional


class WeatherBatchError(RuntimeError):
    """Base error for everything the pipeline raises on purpose."""


class ConfigurationError(WeatherBatchError):
    """Raised when the processor cannot be built, e.g. without an API key."""


class ValidationError(WeatherBatchError):
    """Raised when an input record has no usable city."""


class FetchError(WeatherBatchError):
    """Raised when the weather API answers with a non-success status."""

    body_preview_limit = 500

    def __init__(self, city: str, status_code: int, body: str = "") -> None:
        self.city = city
        self.status_code = status_code
        self.body = body[: self.body_preview_limit]
        message = f"Failed to fetch weather for {city}. Status: {status_code}"
        if self.body:
            message = f"{message}: {self.body}"
        super().__init__(message)


class TransportError(WeatherBatchError):
    """Raised when the request never produced an HTTP response."""

    def __init__(self, city: str, reason: Optional[str] = None) -> None:
        self.city = city
        message = f"Request for weather in {city} failed"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class PayloadError(WeatherBatchError):
    """Raised when the API response lacks the fields the pipeline consumes."""


__all__ = [
    "WeatherBatchError",
    "ConfigurationError",
    "ValidationError",
    "FetchError",
    "TransportError",
    "PayloadError",
]
