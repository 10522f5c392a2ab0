from __future__ import annotations

from typing import Any, Callable, Dict, Optional

import pytest

from weatherbatch.core.services.processor import WeatherRecordProcessor


BASE_URL = "https://openweather.test/data/2.5/weather"


def make_payload(
    name: Optional[str] = "Paris",
    temp: float = 20,
    humidity: float = 65,
    wind_speed: float = 5,
    condition: Optional[str] = "Clear",
) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        "coord": {"lon": 2.35, "lat": 48.85},
        "main": {"temp": temp, "feels_like": temp - 1, "pressure": 1012, "humidity": humidity},
        "wind": {"speed": wind_speed, "deg": 230},
        "dt": 1700000000,
        "cod": 200,
    }
    if name is not None:
        payload["name"] = name
    if condition is not None:
        payload["weather"] = [{"id": 800, "main": condition, "description": condition.lower()}]
    return payload


@pytest.fixture()
def payload_factory() -> Callable[..., Dict[str, Any]]:
    return make_payload


@pytest.fixture()
def processor() -> WeatherRecordProcessor:
    return WeatherRecordProcessor("test-key", base_url=BASE_URL)
