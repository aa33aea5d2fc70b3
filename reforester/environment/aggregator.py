"""Concurrent soil + weather aggregation with fail-soft join.

Both fetches run concurrently and are awaited together; neither failing
cancels the other. A failed source is replaced by its geographic fallback
and tagged ``fallback``. The aggregator never raises for source failures:
its output is always usable, possibly entirely synthetic.
"""

from __future__ import annotations

import asyncio
import logging
import random
import time
from dataclasses import dataclass
from datetime import date
from typing import Callable

from reforester.environment.fallback import estimate_soil, simulate_weather
from reforester.environment.fetchers import SoilFetcher, WeatherFetcher
from reforester.environment.models import (
    Coordinate,
    EnvironmentalSnapshot,
    SoilComposition,
    SourceProvenance,
    SourceResult,
    SourceStatus,
    WeatherSnapshot,
)

logger = logging.getLogger(__name__)

SOIL_FALLBACK_SOURCE = "Regional Estimate"
WEATHER_FALLBACK_SOURCE = "Climate Simulation"
SOIL_FALLBACK_NOTE = "Fallback data used - soil API unavailable"
WEATHER_FALLBACK_NOTE = "Fallback data used - weather API unavailable"


@dataclass(frozen=True)
class AggregationResult:
    snapshot: EnvironmentalSnapshot
    soil: SourceResult[SoilComposition]
    weather: SourceResult[WeatherSnapshot]
    processing_time_ms: int


def _settled(outcome: object, source: str) -> SourceResult:
    """Turn a gather() outcome into a SourceResult.

    Fetchers report failures as results, but anything unexpected that
    escapes one is still contained here rather than failing the join.
    """
    if isinstance(outcome, SourceResult):
        return outcome
    if isinstance(outcome, Exception):
        logger.warning("%s fetch raised unexpectedly: %r", source, outcome)
        return SourceResult.failed(repr(outcome), source)
    if isinstance(outcome, BaseException):
        raise outcome
    return SourceResult.failed(f"unexpected result {outcome!r}", source)


class EnvironmentAggregator:
    """Runs the soil and weather fetchers concurrently and merges the results."""

    def __init__(
        self,
        soil_fetcher: SoilFetcher,
        weather_fetcher: WeatherFetcher,
        rng: random.Random | None = None,
        today: Callable[[], date] = date.today,
    ) -> None:
        self._soil = soil_fetcher
        self._weather = weather_fetcher
        self._rng = rng
        self._today = today

    async def collect(self, coordinate: Coordinate) -> AggregationResult:
        started = time.perf_counter()

        soil_outcome, weather_outcome = await asyncio.gather(
            self._soil.fetch(coordinate),
            self._weather.fetch(coordinate),
            return_exceptions=True,
        )
        soil = self._resolve_soil(coordinate, _settled(soil_outcome, self._soil.source_name))
        weather = self._resolve_weather(coordinate, _settled(weather_outcome, self._weather.source_name))

        snapshot = EnvironmentalSnapshot(
            coordinate=coordinate,
            soil=soil.value,
            weather=weather.value,
            provenance=SourceProvenance(soil=soil.provenance, weather=weather.provenance),
            soil_source=soil.source,
            weather_source=weather.source,
            soil_note=SOIL_FALLBACK_NOTE if soil.status == SourceStatus.fallback else None,
            weather_note=WEATHER_FALLBACK_NOTE if weather.status == SourceStatus.fallback else None,
        )
        elapsed_ms = int((time.perf_counter() - started) * 1000)
        logger.info(
            "Environment collected for (%s, %s) in %dms [soil=%s, weather=%s]",
            coordinate.lat, coordinate.lon, elapsed_ms,
            snapshot.provenance.soil.value, snapshot.provenance.weather.value,
        )
        return AggregationResult(
            snapshot=snapshot, soil=soil, weather=weather, processing_time_ms=elapsed_ms,
        )

    def _resolve_soil(
        self, coordinate: Coordinate, result: SourceResult[SoilComposition]
    ) -> SourceResult[SoilComposition]:
        if result.status == SourceStatus.success:
            return result
        return SourceResult.substituted(estimate_soil(coordinate), SOIL_FALLBACK_SOURCE, result.error)

    def _resolve_weather(
        self, coordinate: Coordinate, result: SourceResult[WeatherSnapshot]
    ) -> SourceResult[WeatherSnapshot]:
        if result.status == SourceStatus.success:
            return result
        simulated = simulate_weather(coordinate, on=self._today(), rng=self._rng)
        return SourceResult.substituted(simulated, WEATHER_FALLBACK_SOURCE, result.error)
