"""Input validation for recommendation requests.

Validation failures raise :class:`~reforester.errors.InputValidationError`
and are never absorbed into a fallback: they indicate a caller bug rather
than an external outage.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Mapping

from reforester.environment.models import Coordinate, SoilComposition, WeatherSnapshot
from reforester.environment.normalize import SOIL_SUM_TOLERANCE
from reforester.errors import InputValidationError

logger = logging.getLogger(__name__)


def _is_number(value: Any) -> bool:
    return (
        isinstance(value, (int, float))
        and not isinstance(value, bool)
        and math.isfinite(value)
    )


def validate_coordinate(lat: Any, lon: Any) -> Coordinate:
    """Check latitude/longitude type and range and build a Coordinate."""
    if not _is_number(lat) or not -90 <= lat <= 90:
        raise InputValidationError(
            f"Invalid latitude: {lat!r}. Must be a number between -90 and 90.", field="lat"
        )
    if not _is_number(lon) or not -180 <= lon <= 180:
        raise InputValidationError(
            f"Invalid longitude: {lon!r}. Must be a number between -180 and 180.", field="lon"
        )
    return Coordinate(lat=float(lat), lon=float(lon))


def _read(data: Any, name: str) -> Any:
    if isinstance(data, Mapping):
        return data.get(name)
    return getattr(data, name, None)


def validate_soil(soil: SoilComposition | Mapping[str, Any]) -> None:
    """Reject fractions outside 0-100; only warn about a loose total.

    Accepts the raw rescaled fractions as a mapping, since out-of-range
    values cannot be represented by :class:`SoilComposition`.
    """
    values = {name: _read(soil, name) for name in ("clay", "sand", "silt")}
    for name, value in values.items():
        if not _is_number(value) or not 0 <= value <= 100:
            raise InputValidationError(
                f"Invalid soil.{name}: {value!r}. Must be a number between 0 and 100.",
                field=f"soil.{name}",
            )
    total = sum(values.values())
    if abs(total - 100) > SOIL_SUM_TOLERANCE:
        # APIs rarely sum to exactly 100; warn rather than reject
        logger.warning("Soil composition sums to %.2f%% (expected ~100%%)", total)


def validate_weather(weather: WeatherSnapshot | Mapping[str, Any]) -> None:
    for name in ("temperature", "precipitation", "max_temperature", "min_temperature"):
        value = _read(weather, name)
        if not _is_number(value):
            raise InputValidationError(
                f"Invalid weather.{name}: {value!r}. Must be a number.", field=f"weather.{name}"
            )


def validate_inputs(
    lat: Any,
    lon: Any,
    soil: SoilComposition | Mapping[str, Any],
    weather: WeatherSnapshot | Mapping[str, Any],
) -> Coordinate:
    """Validate a full recommendation request and return its coordinate."""
    coordinate = validate_coordinate(lat, lon)
    validate_soil(soil)
    validate_weather(weather)
    logger.debug("Input validation passed for coordinates (%s, %s)", lat, lon)
    return coordinate
