"""Normalizers for soil and weather payloads.

Both functions are idempotent: feeding a normalized value back in returns
an equal value. The recommendation generator re-applies them to its inputs
so callers may pass raw upstream dicts or model instances.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

from reforester.environment.models import SoilComposition, WeatherSnapshot
from reforester.utils import round_half_up, safe_float

logger = logging.getLogger(__name__)

DEFAULT_SOIL = {"clay": 25.0, "sand": 40.0, "silt": 35.0}
DEFAULT_WEATHER = {
    "temperature": 20.0,
    "precipitation": 500.0,
    "maxTemperature": 25.0,
    "minTemperature": 15.0,
}

# Sums this close to 100 are left alone; anything else is rescaled exactly.
RESCALE_EPSILON = 0.05
# Looser band used only to warn about noisy upstream data
SOIL_SUM_TOLERANCE = 10.0

_SOIL_FRACTIONS = ("clay", "sand", "silt")


def _as_mapping(data: Any) -> Mapping[str, Any] | None:
    if data is None:
        return None
    if isinstance(data, (SoilComposition, WeatherSnapshot)):
        return data.model_dump(by_alias=True)
    if isinstance(data, Mapping):
        return data
    return None


def _soilgrids_layers(data: Mapping[str, Any]) -> dict[str, Any]:
    """Pull top-layer mean values out of a SoilGrids ``properties`` payload.

    Handles both ``properties: [{name, depths}]`` and
    ``properties: {layers: [{name, depths}]}``.
    """
    props = data.get("properties")
    layers = props.get("layers", []) if isinstance(props, Mapping) else props
    values: dict[str, Any] = {}
    for layer in layers or []:
        if not isinstance(layer, Mapping):
            continue
        name = layer.get("name")
        if name not in _SOIL_FRACTIONS:
            continue
        depths = layer.get("depths") or []
        if depths and isinstance(depths[0], Mapping):
            values[name] = (depths[0].get("values") or {}).get("mean")
    return values


def soil_fractions(data: Any) -> dict[str, float]:
    """Coerce a soil payload into clay/sand/silt numbers summing to 100.

    Missing or non-numeric fractions take the balanced defaults. A sum that
    deviates from 100 is rescaled proportionally, rounded to one decimal,
    and any rounding residue is absorbed by the largest fraction.

    Values are not clamped: a negative or >100 fraction survives the rescale
    so that :func:`~reforester.validators.validate_soil` can reject it.
    """
    mapping = _as_mapping(data)
    if mapping is None:
        logger.warning("No soil data provided, using default composition")
        return dict(DEFAULT_SOIL)

    raw = _soilgrids_layers(mapping) if "properties" in mapping else mapping
    fractions = {
        name: safe_float(raw.get(name), DEFAULT_SOIL[name])
        for name in _SOIL_FRACTIONS
    }

    total = sum(fractions.values())
    if total <= 0:
        logger.warning("Soil fractions sum to %.2f%%, using default composition", total)
        return dict(DEFAULT_SOIL)
    if abs(total - 100) > SOIL_SUM_TOLERANCE:
        logger.warning("Soil composition sums to %.2f%% (expected ~100%%)", total)
    if abs(total - 100) > RESCALE_EPSILON:
        factor = 100 / total
        fractions = {name: value * factor for name, value in fractions.items()}

    rounded = {name: round_half_up(value, 1) for name, value in fractions.items()}
    residue = round_half_up(100 - sum(rounded.values()), 1)
    if residue:
        largest = max(rounded, key=lambda name: rounded[name])
        rounded[largest] = round_half_up(rounded[largest] + residue, 1)

    return rounded


def normalize_soil(data: Any) -> SoilComposition:
    """Normalize a soil payload into a :class:`SoilComposition`.

    Raises pydantic's ``ValidationError`` (a ``ValueError``) when a fraction
    falls outside 0-100 after rescaling.
    """
    return SoilComposition(**soil_fractions(data))


def normalize_weather(data: Any) -> WeatherSnapshot:
    """Coerce a weather payload into finite numbers, defaulting missing fields.

    Accepts camelCase (``minTemperature``) or snake_case keys.
    """
    mapping = _as_mapping(data)
    if mapping is None:
        logger.warning("No weather data provided, using default values")
        mapping = {}

    def pick(camel: str, snake: str) -> float:
        value = mapping.get(camel, mapping.get(snake))
        return safe_float(value, DEFAULT_WEATHER[camel])

    return WeatherSnapshot(
        temperature=pick("temperature", "temperature"),
        precipitation=pick("precipitation", "precipitation"),
        max_temperature=pick("maxTemperature", "max_temperature"),
        min_temperature=pick("minTemperature", "min_temperature"),
    )
