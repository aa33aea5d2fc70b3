"""Pydantic v2 models for the environmental data pipeline."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator

T = TypeVar("T")


class Provenance(str, Enum):
    """Whether a data point came from a live source or a local heuristic."""
    api = "api"
    fallback = "fallback"


class SourceStatus(str, Enum):
    success = "success"
    fallback = "fallback"
    error = "error"


class Coordinate(BaseModel):
    model_config = ConfigDict(frozen=True)

    lat: float = Field(..., ge=-90, le=90)
    lon: float = Field(..., ge=-180, le=180)

    @field_validator("lat", "lon")
    @classmethod
    def must_be_finite(cls, v: float) -> float:
        if not math.isfinite(v):
            raise ValueError("coordinate must be a finite number")
        return v

    def cache_fragment(self, places: int = 2) -> str:
        return f"{self.lat:.{places}f},{self.lon:.{places}f}"


class SoilComposition(BaseModel):
    """Soil texture percentages. Normalized instances sum to 100."""
    model_config = ConfigDict(frozen=True)

    clay: float = Field(..., ge=0, le=100)
    sand: float = Field(..., ge=0, le=100)
    silt: float = Field(..., ge=0, le=100)

    @property
    def total(self) -> float:
        return self.clay + self.sand + self.silt


class WeatherSnapshot(BaseModel):
    """Current conditions in degrees Celsius and millimetres.

    ``min_temperature <= temperature <= max_temperature`` is not enforced;
    upstream data may be noisy.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    temperature: float
    precipitation: float
    min_temperature: float = Field(..., alias="minTemperature")
    max_temperature: float = Field(..., alias="maxTemperature")

    @field_validator("temperature", "precipitation", "min_temperature", "max_temperature")
    @classmethod
    def must_be_finite(cls, v: float) -> float:
        if not math.isfinite(v):
            raise ValueError("weather values must be finite numbers")
        return v


class SourceProvenance(BaseModel):
    model_config = ConfigDict(frozen=True)

    soil: Provenance
    weather: Provenance


class EnvironmentalSnapshot(BaseModel):
    """Merged soil and weather data for one coordinate. Immutable."""
    model_config = ConfigDict(frozen=True)

    coordinate: Coordinate
    soil: SoilComposition
    weather: WeatherSnapshot
    provenance: SourceProvenance
    soil_source: str = ""
    weather_source: str = ""
    soil_note: str | None = None
    weather_note: str | None = None


@dataclass(frozen=True)
class SourceResult(Generic[T]):
    """Outcome of one source fetch: a value, a substituted fallback, or an error.

    Fetchers return ``success`` or ``error``; the aggregator turns ``error``
    into ``fallback`` by consulting the geographic fallback provider.
    """

    status: SourceStatus
    value: T | None = None
    source: str = ""
    error: str | None = None

    @classmethod
    def success(cls, value: T, source: str) -> "SourceResult[T]":
        return cls(status=SourceStatus.success, value=value, source=source)

    @classmethod
    def failed(cls, error: str, source: str = "") -> "SourceResult[T]":
        return cls(status=SourceStatus.error, source=source, error=error)

    @classmethod
    def substituted(cls, value: T, source: str, error: str | None) -> "SourceResult[T]":
        return cls(status=SourceStatus.fallback, value=value, source=source, error=error)

    @property
    def provenance(self) -> Provenance:
        if self.status == SourceStatus.success:
            return Provenance.api
        return Provenance.fallback
