"""End-to-end tests for ReforestationEngine with faked external services."""

from __future__ import annotations

import asyncio
import random

import pytest

from reforester.advisory.mock import MOCK_SOURCE
from reforester.engine import ReforestationEngine
from reforester.errors import AdvisoryError, FallbackDisabledError, InputValidationError
from reforester.config import ReforesterSettings
from reforester.projections.models import Project, SpeciesPlanting
from tests.fakes import FakeAdvisor, FakeSoilClient, FakeWeatherClient, soil_down, weather_down


def _engine(settings, cache, fixed_today, soil=None, weather=None, advisor=None) -> ReforestationEngine:
    return ReforestationEngine(
        settings=settings,
        cache=cache,
        soil_client=soil or FakeSoilClient(),
        weather_client=weather or FakeWeatherClient(),
        advisor=advisor,
        rng=random.Random(5),
        today=fixed_today,
    )


class TestAnalyze:
    def test_both_sources_down(self, settings, cache, fixed_today) -> None:
        engine = _engine(
            settings, cache, fixed_today,
            soil=FakeSoilClient(error=soil_down()), weather=FakeWeatherClient(error=weather_down()),
        )
        result = asyncio.run(engine.analyze(-1.29, 36.82))

        assert result["dataSources"]["soil"] == "fallback"
        assert result["dataSources"]["weather"] == "fallback"
        assert result["dataSources"]["ai"] == MOCK_SOURCE
        assert result["recommendation"]["biome"] == "tropical"
        assert result["soil"]["note"] == "Fallback data used - soil API unavailable"
        assert result["weather"]["note"] == "Fallback data used - weather API unavailable"
        assert result["coordinates"] == {"lat": -1.29, "lon": 36.82}
        assert isinstance(result["processingTimeMs"], int)

    def test_live_sources(self, settings, cache, fixed_today) -> None:
        result = asyncio.run(_engine(settings, cache, fixed_today).analyze(-1.29, 36.82))
        assert result["dataSources"]["soil"] == "api"
        assert result["dataSources"]["weather"] == "api"
        assert "note" not in result["soil"]
        assert result["soil"]["source"] == "SoilGrids API"
        assert result["weather"]["minTemperature"] == 18
        assert result["weather"]["maxTemperature"] == 29

    def test_mixed_provenance(self, settings, cache, fixed_today) -> None:
        engine = _engine(settings, cache, fixed_today, soil=FakeSoilClient(error=soil_down()))
        result = asyncio.run(engine.analyze(-1.29, 36.82))
        assert result["dataSources"]["soil"] == "fallback"
        assert result["dataSources"]["weather"] == "api"
        assert "note" not in result["weather"]

    def test_invalid_coordinate_fetches_nothing(self, settings, cache, fixed_today) -> None:
        soil, weather = FakeSoilClient(), FakeWeatherClient()
        engine = _engine(settings, cache, fixed_today, soil=soil, weather=weather)
        with pytest.raises(InputValidationError):
            asyncio.run(engine.analyze(91, 0))
        assert soil.calls == weather.calls == 0

    def test_advisor_answer_labelled(self, settings, cache, fixed_today) -> None:
        engine = _engine(settings, cache, fixed_today, advisor=FakeAdvisor(text="Plant mangroves."))
        result = asyncio.run(engine.analyze(5.0, 100.0))
        assert result["dataSources"]["ai"] == "Claude AI"
        assert result["recommendation"]["text"] == "Plant mangroves."

    def test_fallback_disabled_surfaces(self, cache, fixed_today) -> None:
        settings = ReforesterSettings(_env_file=None, llm_api_key="", fallback_enabled=False)
        engine = _engine(settings, cache, fixed_today, advisor=FakeAdvisor(error=AdvisoryError("down")))
        with pytest.raises(FallbackDisabledError):
            asyncio.run(engine.analyze(5.0, 100.0))


class TestLifecycle:
    def test_context_manager_closes_clients(self, settings, cache, fixed_today) -> None:
        soil, weather = FakeSoilClient(), FakeWeatherClient()

        async def run() -> None:
            async with _engine(settings, cache, fixed_today, soil=soil, weather=weather) as engine:
                await engine.analyze(50.0, 5.0)

        asyncio.run(run())
        assert soil.closed and weather.closed

    def test_cache_stats_and_clear(self, settings, cache, fixed_today) -> None:
        engine = _engine(settings, cache, fixed_today)
        asyncio.run(engine.analyze(50.0, 5.0))
        # soil, weather and recommendation entries
        assert engine.cache_stats()["size"] == 3
        assert engine.clear_cache() == 3
        assert engine.cache_stats()["size"] == 0

    def test_no_credential_means_no_advisor(self, settings) -> None:
        engine = ReforestationEngine(settings=settings)
        assert engine.advisor is None
        asyncio.run(engine.aclose())


class TestProjectionFacade:
    def test_projection_methods(self, settings) -> None:
        engine = ReforestationEngine(settings=settings)
        project = Project(id="p", name="Test", species=[SpeciesPlanting(name="Oak", quantity=1000)])
        assert len(engine.growth_projections(project)) == 21
        assert len(engine.carbon_timeline(project)) == 21
        assert 0 <= engine.biodiversity_impact(project).score <= 100
        assert engine.financial_analytics(project).roi.percentage == 0
        assert engine.environmental_equivalents(project).mature_surviving_trees == 850
        assert engine.portfolio_overview([project]).overview.total_trees == 1000
        assert engine.comparative_analytics([project], "area")[0].project_id == "p"
        assert [b["name"] for b in engine.list_biomes()] == ["tropical", "temperate", "boreal"]
        asyncio.run(engine.aclose())
