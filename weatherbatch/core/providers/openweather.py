"""OpenWeather current-weather client."""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import requests

from weatherbatch.core.errors import FetchError, PayloadError, TransportError


logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.openweathermap.org/data/2.5/weather"


class OpenWeatherClient:
    """Integration with the OpenWeather current weather endpoint, queried by city name."""

    name = "openweather"

    def __init__(
        self,
        *,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = 10.0,
    ) -> None:
        self.api_key = api_key
        self.base_url = base_url
        self._owns_session = session is None
        self.session = session or requests.Session()
        self.timeout = timeout

    def fetch_weather(self, city: str) -> Dict[str, Any]:  # noqa: D401
        """Return the raw OpenWeather payload for ``city`` in metric units."""
        params = {"q": city, "appid": self.api_key, "units": "metric"}
        logger.info("Fetching weather for %s", city)
        try:
            response = self.session.get(self.base_url, params=params, timeout=self.timeout)
        except requests.RequestException as exc:
            logger.error("Request for %s failed", city, exc_info=exc)
            raise TransportError(city, str(exc)) from exc

        if not response.ok:
            error_text = response.text
            logger.error("API request failed for %s: %s", city, error_text)
            raise FetchError(city, response.status_code, error_text)

        try:
            data = response.json()
        except ValueError as exc:
            logger.error("Failed to decode JSON for %s", city, exc_info=exc)
            raise PayloadError(f"Invalid JSON in weather response for {city}") from exc
        if not isinstance(data, dict):
            raise PayloadError(f"Unexpected weather response for {city}: expected an object")
        return data

    def close(self) -> None:
        """Close the HTTP session if this client created it."""
        if self._owns_session:
            self.session.close()


__all__ = ["OpenWeatherClient", "DEFAULT_BASE_URL"]
