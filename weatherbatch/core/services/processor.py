"""Turn a city name into a normalized, annotated weather record."""
from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

import requests
from pydantic import ValidationError as SchemaValidationError

from weatherbatch.core.abstractions import NormalizedWeatherRecord, WeatherClient
from weatherbatch.core.errors import ConfigurationError, PayloadError, ValidationError
from weatherbatch.core.providers.openweather import DEFAULT_BASE_URL, OpenWeatherClient
from weatherbatch.core.schemas import RawWeatherPayload


logger = logging.getLogger(__name__)

PRECIPITATION_CONDITIONS = frozenset(
    {"rain", "snow", "drizzle", "storm", "thunderstorm", "mist"}
)
HEAT_THRESHOLD_C = 32
FROST_THRESHOLD_C = 0
MS_TO_KPH = 3.6


def celsius_to_fahrenheit(celsius: float) -> float:
    return celsius * 9 / 5 + 32


def _display(value: float) -> str:
    # 20.0 prints as "20", 18.36 stays "18.36"
    if float(value).is_integer():
        return str(int(value))
    return str(value)


class WeatherRecordProcessor:
    """Fetch, normalize and annotate current weather for single input records.

    The processor only holds the API credential and the HTTP client bound to
    the fixed endpoint; every record it returns is built fresh.
    """

    def __init__(
        self,
        api_key: Optional[str],
        *,
        base_url: str = DEFAULT_BASE_URL,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = 10.0,
        client: Optional[WeatherClient] = None,
    ) -> None:
        if not api_key:
            raise ConfigurationError("OpenWeatherMap API key is required.")
        self.api_key = api_key
        self._own_client: Optional[OpenWeatherClient] = None
        if client is None:
            self._own_client = OpenWeatherClient(
                api_key=api_key, base_url=base_url, session=session, timeout=timeout
            )
        self.client: WeatherClient = client or self._own_client

    def close(self) -> None:
        """Release the HTTP client built by this processor; injected clients stay open."""
        if self._own_client is not None:
            self._own_client.close()

    def __enter__(self) -> "WeatherRecordProcessor":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def fetch_weather(self, city: str) -> dict:
        return self.client.fetch_weather(city)

    def normalize_data(
        self, raw: Mapping[str, Any], city: Optional[str] = None
    ) -> NormalizedWeatherRecord:
        """Map a raw OpenWeather payload onto :class:`NormalizedWeatherRecord`.

        ``city`` is used only when the payload carries no ``name`` of its own.
        """
        try:
            payload = RawWeatherPayload.model_validate(raw)
        except SchemaValidationError as exc:
            raise PayloadError(
                f"Weather response for {city or raw.get('name') or 'unknown city'} "
                f"is missing required fields: {exc.error_count()} error(s)"
            ) from exc

        celsius = payload.main.temp
        fahrenheit = celsius_to_fahrenheit(celsius)

        record = NormalizedWeatherRecord(
            city=payload.name or city or "",
            temperature=round(celsius, 2),
            condition=payload.primary_condition or "N/A",
            humidity=payload.main.humidity,
            wind_speed=round(payload.wind.speed * MS_TO_KPH, 2),
            raw_response=raw,
        )
        record.alert_type = self.generate_alert(record)
        record.summary = self.generate_summary(record, fahrenheit)

        logger.debug("Normalized data for %s: %s", record.city, record)
        return record

    def generate_alert(self, record: NormalizedWeatherRecord) -> Optional[str]:
        """Classify the record; precipitation wins over temperature alerts."""
        if record.condition.lower() in PRECIPITATION_CONDITIONS:
            return "Precipitation Alert"
        if record.temperature > HEAT_THRESHOLD_C:
            return "Heat Alert"
        if record.temperature < FROST_THRESHOLD_C:
            return "Frost Alert"
        return None

    def generate_summary(self, record: NormalizedWeatherRecord, fahrenheit: float) -> str:
        return (
            f"Daily Weather - {record.city}: "
            f"Temp: {_display(record.temperature)}°C / {fahrenheit:.2f}°F, "
            f"Condition: {record.condition}, "
            f"Humidity: {_display(record.humidity)}%, "
            f"Wind: {_display(record.wind_speed)} kph."
        )

    def process(self, item: Mapping[str, Any]) -> NormalizedWeatherRecord:
        city = item.get("city")
        if not isinstance(city, str) or not city.strip():
            raise ValidationError('Input item must have a "city" property.')
        raw = self.fetch_weather(city)
        return self.normalize_data(raw, city=city)


__all__ = ["WeatherRecordProcessor", "celsius_to_fahrenheit", "PRECIPITATION_CONDITIONS"]
