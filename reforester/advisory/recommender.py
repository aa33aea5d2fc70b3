"""Planting recommendation generator.

Per request:
  1. NORMALIZE soil and weather inputs (same normalizers as the fetchers)
  2. VALIDATE coordinate, soil and weather - failures propagate to the caller
  3. CACHE lookup keyed on rounded coordinate + soil/weather fingerprint
  4. No advisory credential -> deterministic mock, cached
  5. Advisory call under a deadline -> cached on success
  6. Advisory failure -> mock tagged ``fallback`` (or FallbackDisabledError)
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Any, Protocol

from reforester.advisory.mock import (
    MOCK_FALLBACK_SOURCE,
    MOCK_MODEL_ID,
    MOCK_SOURCE,
    build_mock_text,
    determine_biome,
)
from reforester.advisory.models import Recommendation
from reforester.advisory.prompts import REFORESTATION_STRATEGY_PROMPT
from reforester.cache import ExpiringCache
from reforester.config import ReforesterSettings, get_config
from reforester.environment.models import Coordinate, SoilComposition, WeatherSnapshot
from reforester.environment.normalize import normalize_weather, soil_fractions
from reforester.errors import AdvisoryError, FallbackDisabledError
from reforester.validators import validate_inputs

logger = logging.getLogger(__name__)

_PROVIDER_LABELS = {
    "anthropic": "Claude AI",
    "openai": "OpenAI",
    "deepseek": "DeepSeek",
    "ollama": "Ollama",
}


class Advisor(Protocol):
    model: str

    async def complete(self, prompt: str) -> str: ...


def recommendation_cache_key(
    coordinate: Coordinate, soil: SoilComposition, weather: WeatherSnapshot
) -> str:
    soil_key = f"{soil.clay:.1f},{soil.sand:.1f},{soil.silt:.1f}"
    weather_key = f"{weather.temperature:.1f},{weather.precipitation:.1f}"
    return f"rec:{coordinate.lat:.6f},{coordinate.lon:.6f},{soil_key},{weather_key}"


def build_prompt(coordinate: Coordinate, soil: SoilComposition, weather: WeatherSnapshot) -> str:
    return REFORESTATION_STRATEGY_PROMPT.format(
        lat=coordinate.lat,
        lon=coordinate.lon,
        clay=soil.clay,
        sand=soil.sand,
        silt=soil.silt,
        temperature=weather.temperature,
        precipitation=weather.precipitation,
        max_temperature=weather.max_temperature,
        min_temperature=weather.min_temperature,
    )


def mock_recommendation(
    coordinate: Coordinate, soil: SoilComposition, weather: WeatherSnapshot
) -> Recommendation:
    return Recommendation(
        text=build_mock_text(coordinate, soil, weather),
        source=MOCK_SOURCE,
        model=MOCK_MODEL_ID,
        biome=determine_biome(coordinate.lat).value,
    )


class RecommendationGenerator:
    """Produces a recommendation for validated environmental inputs.

    Parameters
    ----------
    cache : Shared expiring cache (``rec:`` keys).
    advisor : Advisory client; ``None`` means no credential is configured.
    config : Settings for TTL, deadline and the fallback switch.
    """

    def __init__(
        self,
        cache: ExpiringCache,
        advisor: Advisor | None = None,
        config: ReforesterSettings | None = None,
    ) -> None:
        self.config = config or get_config()
        self._cache = cache
        self._advisor = advisor
        self.fallback_enabled = self.config.fallback_enabled
        self.timeout = self.config.llm_timeout
        self.cache_ttl = self.config.recommendation_cache_ttl
        self.source_label = _PROVIDER_LABELS.get(self.config.llm_provider, "Advisory AI")

    async def recommend(self, lat: Any, lon: Any, soil: Any, weather: Any) -> Recommendation:
        started = time.perf_counter()

        fractions = soil_fractions(soil)
        weather_n = normalize_weather(weather)
        try:
            coordinate = validate_inputs(lat, lon, fractions, weather_n)
        except ValueError as exc:
            logger.error("Validation error: %s", exc)
            raise
        soil_n = SoilComposition(**fractions)
        logger.debug(
            "Processed soil clay=%s%% sand=%s%% silt=%s%%; weather temp=%s°C precip=%smm",
            soil_n.clay, soil_n.sand, soil_n.silt, weather_n.temperature, weather_n.precipitation,
        )

        key = recommendation_cache_key(coordinate, soil_n, weather_n)
        cached = self._cache.get(key)
        if cached is not None:
            logger.debug("Returning cached recommendation for (%s, %s)", lat, lon)
            return cached.model_copy(update={"cached": True})

        if self._advisor is None:
            logger.warning("No advisory API key configured, using mock recommendation")
            result = mock_recommendation(coordinate, soil_n, weather_n)
            self._cache.set(key, result, ttl=self.cache_ttl)
            return result

        try:
            text = await asyncio.wait_for(
                self._advisor.complete(build_prompt(coordinate, soil_n, weather_n)),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError as exc:
            elapsed_ms = int((time.perf_counter() - started) * 1000)
            logger.warning("Advisory request timeout after %dms for (%s, %s)", elapsed_ms, lat, lon)
            return self._degrade(coordinate, soil_n, weather_n, elapsed_ms, exc)
        except AdvisoryError as exc:
            elapsed_ms = int((time.perf_counter() - started) * 1000)
            if exc.timed_out:
                logger.warning(
                    "Advisory client timeout after %dms for (%s, %s): %s", elapsed_ms, lat, lon, exc
                )
            else:
                logger.warning("Advisory API error: %s", exc)
            return self._degrade(coordinate, soil_n, weather_n, elapsed_ms, exc)
        except Exception as exc:
            elapsed_ms = int((time.perf_counter() - started) * 1000)
            logger.warning("Unexpected advisory failure (%s): %s", type(exc).__name__, exc)
            return self._degrade(coordinate, soil_n, weather_n, elapsed_ms, exc)

        elapsed_ms = int((time.perf_counter() - started) * 1000)
        result = Recommendation(
            text=text,
            source=self.source_label,
            model=self._advisor.model,
            biome=determine_biome(coordinate.lat).value,
            processing_time_ms=elapsed_ms,
        )
        self._cache.set(key, result, ttl=self.cache_ttl)
        logger.debug("Advisory recommendation generated in %dms for (%s, %s)", elapsed_ms, lat, lon)
        return result

    def _degrade(
        self,
        coordinate: Coordinate,
        soil: SoilComposition,
        weather: WeatherSnapshot,
        elapsed_ms: int,
        cause: BaseException,
    ) -> Recommendation:
        if not self.fallback_enabled:
            raise FallbackDisabledError(
                f"Failed to get advisory recommendation: {cause}", cause=cause
            ) from cause

        logger.warning("Falling back to mock recommendation")
        return mock_recommendation(coordinate, soil, weather).model_copy(update={
            "source": MOCK_FALLBACK_SOURCE,
            "fallback": True,
            "processing_time_ms": elapsed_ms,
        })
