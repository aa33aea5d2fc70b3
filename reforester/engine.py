"""Reforestation engine facade.

Implements the analysis pipeline for a coordinate:
  1. VALIDATE - Reject malformed coordinates before any network call
  2. COLLECT - Fetch soil and weather concurrently, substituting fallbacks
  3. RECOMMEND - Advisory planting strategy (or deterministic mock)
  4. ASSEMBLE - Response with per-source provenance and fallback notes

and exposes the deterministic project projections alongside it. One engine
is built per process; it owns the shared cache and the HTTP clients.
"""

from __future__ import annotations

import logging
import random
import time
from datetime import date, datetime, timezone
from typing import Any, Callable, Sequence

from reforester.advisory.adapter import AdvisoryClient
from reforester.advisory.mock import list_biomes
from reforester.advisory.recommender import Advisor, RecommendationGenerator
from reforester.cache import ExpiringCache
from reforester.config import ReforesterSettings, get_config
from reforester.environment.aggregator import EnvironmentAggregator
from reforester.environment.api_clients import OpenMeteoClient, SoilGridsClient
from reforester.environment.fetchers import SoilFetcher, WeatherFetcher
from reforester.projections.biodiversity import calculate_biodiversity_impact
from reforester.projections.financial import (
    calculate_financial_analytics,
    environmental_equivalents,
)
from reforester.projections.growth import carbon_timeline, project_growth
from reforester.projections.models import (
    BiodiversityImpact,
    CarbonTimelineEntry,
    ComparisonEntry,
    EnvironmentalEquivalents,
    FinancialAnalytics,
    GrowthProjectionPoint,
    PortfolioOverview,
    Project,
)
from reforester.projections.portfolio import comparative_analytics, portfolio_overview
from reforester.validators import validate_coordinate

logger = logging.getLogger(__name__)


class ReforestationEngine:
    """Entry point for analysis and projection requests.

    Parameters
    ----------
    settings : Runtime settings; defaults to the process-wide config.
    cache : Shared expiring cache; a fresh one is built when omitted.
    soil_client, weather_client : External API clients (injectable for tests).
    advisor : Advisory client. Built from settings when a credential is
        configured, otherwise the deterministic mock is used.
    rng, today : Randomness and date source for the weather simulation.
    """

    def __init__(
        self,
        settings: ReforesterSettings | None = None,
        cache: ExpiringCache | None = None,
        soil_client: SoilGridsClient | None = None,
        weather_client: OpenMeteoClient | None = None,
        advisor: Advisor | None = None,
        rng: random.Random | None = None,
        today: Callable[[], date] = date.today,
    ) -> None:
        self.settings = settings or get_config()
        self.cache = cache if cache is not None else ExpiringCache(
            default_ttl=self.settings.recommendation_cache_ttl
        )

        self.soil_client = soil_client or SoilGridsClient(
            base_url=self.settings.soil_api_url, timeout=self.settings.soil_timeout
        )
        self.weather_client = weather_client or OpenMeteoClient(
            base_url=self.settings.weather_api_url, timeout=self.settings.weather_timeout
        )
        self.aggregator = EnvironmentAggregator(
            SoilFetcher(
                self.soil_client, self.cache,
                timeout=self.settings.soil_timeout, cache_ttl=self.settings.soil_cache_ttl,
            ),
            WeatherFetcher(
                self.weather_client, self.cache,
                timeout=self.settings.weather_timeout, cache_ttl=self.settings.weather_cache_ttl,
            ),
            rng=rng,
            today=today,
        )

        if advisor is None and self.settings.advisory_configured:
            advisor = AdvisoryClient(self.settings)
        self.advisor = advisor
        self.recommender = RecommendationGenerator(self.cache, advisor=advisor, config=self.settings)

    async def __aenter__(self) -> "ReforestationEngine":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self.soil_client.aclose()
        await self.weather_client.aclose()
        closer = getattr(self.advisor, "aclose", None)
        if closer is not None:
            await closer()

    # ------------------------------------------------------------------
    # Analysis pipeline
    # ------------------------------------------------------------------

    async def analyze(self, lat: Any, lon: Any) -> dict[str, Any]:
        """Full analysis for one coordinate.

        Raises
        ------
        InputValidationError
            Malformed coordinate; nothing is fetched.
        FallbackDisabledError
            The advisory call failed while fallback is switched off.

        Source failures never raise: they surface as ``"fallback"`` in
        ``dataSources`` together with a note on the affected section.
        """
        started = time.perf_counter()
        coordinate = validate_coordinate(lat, lon)
        logger.info("Analyzing location (%s, %s)", coordinate.lat, coordinate.lon)

        collected = await self.aggregator.collect(coordinate)
        snapshot = collected.snapshot
        recommendation = await self.recommender.recommend(
            coordinate.lat, coordinate.lon, snapshot.soil, snapshot.weather
        )

        soil = snapshot.soil.model_dump()
        soil["source"] = snapshot.soil_source
        if snapshot.soil_note:
            soil["note"] = snapshot.soil_note
        weather = snapshot.weather.model_dump(by_alias=True)
        weather["source"] = snapshot.weather_source
        if snapshot.weather_note:
            weather["note"] = snapshot.weather_note

        elapsed_ms = int((time.perf_counter() - started) * 1000)
        logger.info(
            "Analysis completed in %dms for (%s, %s)", elapsed_ms, coordinate.lat, coordinate.lon
        )
        return {
            "coordinates": {"lat": coordinate.lat, "lon": coordinate.lon},
            "dataSources": {
                "soil": snapshot.provenance.soil.value,
                "weather": snapshot.provenance.weather.value,
                "ai": recommendation.source,
            },
            "soil": soil,
            "weather": weather,
            "recommendation": recommendation.model_dump(by_alias=True, exclude_none=True),
            "processingTimeMs": elapsed_ms,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

    # ------------------------------------------------------------------
    # Projections (pure, driven by the stored analytics snapshot)
    # ------------------------------------------------------------------

    def growth_projections(self, project: Project) -> list[GrowthProjectionPoint]:
        return project_growth(project)

    def carbon_timeline(self, project: Project) -> list[CarbonTimelineEntry]:
        return carbon_timeline(project)

    def biodiversity_impact(self, project: Project) -> BiodiversityImpact:
        return calculate_biodiversity_impact(project)

    def financial_analytics(self, project: Project) -> FinancialAnalytics:
        return calculate_financial_analytics(project)

    def environmental_equivalents(self, project: Project) -> EnvironmentalEquivalents:
        return environmental_equivalents(project)

    def portfolio_overview(self, projects: Sequence[Project]) -> PortfolioOverview:
        return portfolio_overview(projects)

    def comparative_analytics(
        self, projects: Sequence[Project], metric: str = "carbon_sequestration"
    ) -> list[ComparisonEntry]:
        return comparative_analytics(projects, metric)

    # ------------------------------------------------------------------
    # Metadata and maintenance
    # ------------------------------------------------------------------

    @staticmethod
    def list_biomes() -> list[dict[str, str]]:
        return list_biomes()

    def clear_cache(self) -> int:
        cleared = self.cache.clear()
        logger.info("Cleared %d cache entries", cleared)
        return cleared

    def cache_stats(self) -> dict[str, Any]:
        return self.cache.stats()
