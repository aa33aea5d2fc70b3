"""Timeout-bounded soil and weather fetchers.

A fetcher wraps exactly one client call, enforces its own deadline, and
normalizes the payload. It reports the outcome as a
:class:`~reforester.environment.models.SourceResult` instead of raising, so
the aggregator can pattern-match on success versus error. Successful values
are cached per coordinate (2 decimal places); failures are never cached and
never retried within the same request.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, Generic, TypeVar

from reforester.cache import ExpiringCache
from reforester.environment.api_clients import OpenMeteoClient, SoilGridsClient
from reforester.environment.models import Coordinate, SoilComposition, SourceResult, WeatherSnapshot
from reforester.environment.normalize import normalize_soil, normalize_weather
from reforester.errors import SourceFailure

logger = logging.getLogger(__name__)

T = TypeVar("T")


class _BoundedFetcher(Generic[T]):
    """Cache lookup, deadline, normalization and failure capture for one source."""

    kind = "source"

    def __init__(
        self,
        call: Callable[[Coordinate], Awaitable[Any]],
        normalizer: Callable[[Any], T],
        source_name: str,
        timeout: float,
        cache: ExpiringCache,
        cache_ttl: float,
    ) -> None:
        self._call = call
        self._normalize = normalizer
        self.source_name = source_name
        self.timeout = timeout
        self._cache = cache
        self.cache_ttl = cache_ttl

    def cache_key(self, coordinate: Coordinate) -> str:
        return f"{self.kind}:{coordinate.cache_fragment(2)}"

    async def fetch(self, coordinate: Coordinate) -> SourceResult[T]:
        key = self.cache_key(coordinate)
        cached = self._cache.get(key)
        if cached is not None:
            logger.debug("%s cache hit for %s", self.kind, key)
            return SourceResult.success(cached, self.source_name)

        try:
            raw = await asyncio.wait_for(self._call(coordinate), timeout=self.timeout)
        except asyncio.TimeoutError:
            logger.warning(
                "%s timed out after %.1fs for (%s, %s)",
                self.source_name, self.timeout, coordinate.lat, coordinate.lon,
            )
            return SourceResult.failed(f"timeout after {self.timeout}s", self.source_name)
        except SourceFailure as exc:
            logger.warning(
                "%s failed for (%s, %s): %s", self.source_name, coordinate.lat, coordinate.lon, exc
            )
            return SourceResult.failed(str(exc), self.source_name)

        try:
            value = self._normalize(raw)
        except ValueError as exc:
            logger.warning(
                "%s returned unusable data for (%s, %s): %s",
                self.source_name, coordinate.lat, coordinate.lon, exc,
            )
            return SourceResult.failed(f"bad payload: {exc}", self.source_name)
        self._cache.set(key, value, ttl=self.cache_ttl)
        return SourceResult.success(value, self.source_name)


class SoilFetcher(_BoundedFetcher[SoilComposition]):
    kind = "soil"

    def __init__(
        self,
        client: SoilGridsClient,
        cache: ExpiringCache,
        timeout: float = 4.0,
        cache_ttl: float = 30 * 60,
    ) -> None:
        super().__init__(
            call=client.get_soil,
            normalizer=normalize_soil,
            source_name=client.source_name,
            timeout=timeout,
            cache=cache,
            cache_ttl=cache_ttl,
        )


class WeatherFetcher(_BoundedFetcher[WeatherSnapshot]):
    kind = "weather"

    def __init__(
        self,
        client: OpenMeteoClient,
        cache: ExpiringCache,
        timeout: float = 5.0,
        cache_ttl: float = 15 * 60,
    ) -> None:
        super().__init__(
            call=client.get_weather,
            normalizer=normalize_weather,
            source_name=client.source_name,
            timeout=timeout,
            cache=cache,
            cache_ttl=cache_ttl,
        )
