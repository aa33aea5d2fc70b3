"""Geographic fallback providers for soil and weather.

Used whenever a live source fails or times out. Soil estimates are pure
functions of the coordinate. Weather is a seasonal sinusoidal simulation
with explicit jitter; pass a seeded ``random.Random`` and a fixed date to
make it reproducible.

Region and latitude-band tables are ordered rule lists evaluated
top-to-bottom; the first matching rule wins. Every point also falls in a
latitude band, so regional boxes must be tried first.
"""

from __future__ import annotations

import math
import random
from dataclasses import dataclass
from datetime import date
from typing import Callable

from reforester.environment.models import Coordinate, SoilComposition, WeatherSnapshot
from reforester.utils import clamp, round_half_up


@dataclass(frozen=True)
class SoilRule:
    """A named predicate over (lat, lon) mapped to a fixed composition."""

    name: str
    matches: Callable[[float, float], bool]
    composition: SoilComposition


def _soil(clay: float, sand: float, silt: float) -> SoilComposition:
    return SoilComposition(clay=clay, sand=sand, silt=silt)


# ---------------------------------------------------------------------------
# Soil: regional bounding boxes (open intervals), then latitude bands
# ---------------------------------------------------------------------------

REGION_SOIL_RULES: tuple[SoilRule, ...] = (
    SoilRule("west_africa", lambda lat, lon: 5 < lat < 20 and -20 < lon < 20, _soil(22, 60, 18)),
    SoilRule("east_africa", lambda lat, lon: -10 < lat < 15 and 25 < lon < 50, _soil(25, 55, 20)),
    SoilRule("southern_africa", lambda lat, lon: lat < -10 and 10 < lon < 40, _soil(18, 65, 17)),
    SoilRule("north_africa", lambda lat, lon: lat > 20 and -20 < lon < 40, _soil(15, 75, 10)),
    SoilRule("amazon", lambda lat, lon: -15 < lat < 5 and -80 < lon < -45, _soil(35, 40, 25)),
    SoilRule("central_america", lambda lat, lon: 10 < lat < 25 and -100 < lon < -75, _soil(28, 45, 27)),
    SoilRule("southeast_asia", lambda lat, lon: -10 < lat < 25 and 90 < lon < 130, _soil(32, 38, 30)),
    SoilRule("south_asia", lambda lat, lon: 5 < lat < 35 and 65 < lon < 90, _soil(30, 42, 28)),
)

LATITUDE_SOIL_RULES: tuple[SoilRule, ...] = (
    SoilRule("tropical", lambda lat, lon: abs(lat) < 15, _soil(25, 50, 25)),
    SoilRule("subtropical", lambda lat, lon: abs(lat) < 35, _soil(20, 55, 25)),
    SoilRule("temperate", lambda lat, lon: abs(lat) < 55, _soil(25, 40, 35)),
    SoilRule("boreal", lambda lat, lon: True, _soil(15, 60, 25)),
)

# World Reference Base soil classes returned by SoilGrids classification
SOIL_CLASS_COMPOSITIONS: dict[str, SoilComposition] = {
    "acrisol": _soil(35, 40, 25),
    "alisol": _soil(40, 30, 30),
    "arenosol": _soil(8, 85, 7),
    "cambisol": _soil(25, 45, 30),
    "chernozem": _soil(30, 35, 35),
    "ferralsol": _soil(45, 25, 30),
    "fluvisol": _soil(28, 42, 30),
    "gleysol": _soil(35, 35, 30),
    "kastanozem": _soil(25, 50, 25),
    "luvisol": _soil(32, 38, 30),
    "phaeozem": _soil(30, 40, 30),
    "podzol": _soil(12, 75, 13),
    "regosol": _soil(15, 70, 15),
    "solonchak": _soil(25, 45, 30),
    "vertisol": _soil(55, 20, 25),
}


def match_soil_rule(lat: float, lon: float) -> SoilRule:
    """Return the first regional rule that matches, else the latitude band."""
    for rule in REGION_SOIL_RULES + LATITUDE_SOIL_RULES:
        if rule.matches(lat, lon):
            return rule
    return LATITUDE_SOIL_RULES[-1]


def estimate_soil(coordinate: Coordinate) -> SoilComposition:
    """Plausible soil texture for a coordinate from regional averages."""
    return match_soil_rule(coordinate.lat, coordinate.lon).composition


def soil_for_class(soil_class: str | None) -> SoilComposition | None:
    """Look up a WRB soil class name such as ``"Ferralsols"``."""
    if not soil_class:
        return None
    key = soil_class.strip().lower()
    if key.endswith("s") and key[:-1] in SOIL_CLASS_COMPOSITIONS:
        key = key[:-1]
    return SOIL_CLASS_COMPOSITIONS.get(key)


# ---------------------------------------------------------------------------
# Weather: seasonal simulation
# ---------------------------------------------------------------------------

# (max |lat| exclusive, probability of rain today)
_RAIN_PROBABILITY_BANDS: tuple[tuple[float, float], ...] = (
    (10, 0.7),    # tropical
    (30, 0.2),    # subtropical desert belt
    (60, 0.5),    # temperate
    (math.inf, 0.3),  # polar
)
_MAX_DAILY_RAIN_MM = 8.0
_MIN_TEMP_C = -20.0
_MAX_TEMP_C = 45.0


def rain_probability(lat: float) -> float:
    for upper, probability in _RAIN_PROBABILITY_BANDS:
        if abs(lat) < upper:
            return probability
    return _RAIN_PROBABILITY_BANDS[-1][1]


def seasonal_base_temperature(lat: float, day_of_year: int) -> float:
    """Base temperature before altitude jitter: 20 - 0.6|lat| + seasonal swing."""
    latitude_effect = -abs(lat) * 0.6
    seasonal_effect = math.sin((day_of_year - 80) / 365 * 2 * math.pi) * 12
    return 20 + latitude_effect + seasonal_effect


def simulate_weather(
    coordinate: Coordinate,
    on: date | None = None,
    rng: random.Random | None = None,
) -> WeatherSnapshot:
    """Simulate today's weather at a coordinate.

    Parameters
    ----------
    coordinate : Location to simulate.
    on : Calendar date used for the seasonal term (defaults to today).
    rng : Random source for altitude jitter and rainfall draws.
    """
    rng = rng or random.Random()
    day_of_year = (on or date.today()).timetuple().tm_yday

    altitude_effect = rng.uniform(-4, 4)
    base = seasonal_base_temperature(coordinate.lat, day_of_year) + altitude_effect

    precipitation = 0.0
    if rng.random() < rain_probability(coordinate.lat):
        precipitation = round_half_up(rng.random() * _MAX_DAILY_RAIN_MM, 1)

    temperature = clamp(base + rng.uniform(-3, 3), _MIN_TEMP_C, _MAX_TEMP_C)
    max_temperature = base + 8 + rng.random() * 4
    min_temperature = base - 8 - rng.random() * 4

    return WeatherSnapshot(
        temperature=round_half_up(temperature, 1),
        precipitation=precipitation,
        max_temperature=round_half_up(max_temperature, 1),
        min_temperature=round_half_up(min_temperature, 1),
    )
