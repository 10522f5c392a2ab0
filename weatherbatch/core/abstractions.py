"""Core abstractions for the weather batch domain."""
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Optional, Protocol, Union


@dataclass(slots=True)
class NormalizedWeatherRecord:
    """Current weather for one city in the pipeline's fixed schema.

    Units:
    - temperature in Celsius, rounded to two decimals
    - humidity in percent
    - wind speed in kilometres per hour, rounded to two decimals
    """

    city: str
    temperature: float
    condition: str
    humidity: float
    wind_speed: float
    temperature_unit: str = "C"
    alert_type: Optional[str] = None
    summary: str = ""
    raw_response: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "city": self.city,
            "temperature": self.temperature,
            "temperature_unit": self.temperature_unit,
            "condition": self.condition,
            "humidity": self.humidity,
            "wind_speed": self.wind_speed,
            "alert_type": self.alert_type,
            "summary": self.summary,
            "raw_response": self.raw_response,
        }


@dataclass(frozen=True)
class ErrorRecord:
    """Failure output for one input record."""

    error: str
    city: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        payload = asdict(self)
        if self.city is None:
            payload.pop("city")
        return payload


OutputRecord = Union[NormalizedWeatherRecord, ErrorRecord]


class WeatherClient(Protocol):
    """A data source returning the raw current-weather payload for a city."""

    def fetch_weather(self, city: str) -> Dict[str, Any]:
        """Return the raw JSON payload for ``city``."""
        ...


__all__ = ["NormalizedWeatherRecord", "ErrorRecord", "OutputRecord", "WeatherClient"]
