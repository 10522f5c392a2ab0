"""Pydantic schema for the OpenWeather current-weather payload.

Only the fields the pipeline consumes are declared; everything else passes
through untouched and is kept verbatim in ``raw_response``.
"""
from __future__ import annotations

from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

__all__ = ["RawWeatherPayload", "MainReadings", "WindReadings", "ConditionEntry"]


class _Lenient(BaseModel):
    model_config = ConfigDict(extra="allow")


class MainReadings(_Lenient):
    temp: float
    humidity: Union[int, float]


class WindReadings(_Lenient):
    speed: float


class ConditionEntry(_Lenient):
    main: Optional[str] = None


class RawWeatherPayload(_Lenient):
    name: Optional[str] = None
    main: MainReadings
    wind: WindReadings
    weather: List[Optional[ConditionEntry]] = Field(default_factory=list)

    @field_validator("weather", mode="before")
    @classmethod
    def _none_as_empty(cls, value):
        return [] if value is None else value

    @property
    def primary_condition(self) -> Optional[str]:
        if not self.weather:
            return None
        first = self.weather[0]
        if first is None:
            return None
        return first.main or None
