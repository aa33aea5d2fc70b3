"""Tests for reforester/projections/biodiversity.py scoring."""

from __future__ import annotations

import random

import pytest

from reforester.projections.biodiversity import (
    calculate_biodiversity_impact,
    density_bonus,
    impact_level,
)
from reforester.projections.models import AnalyticsSnapshot, Project, SpeciesPlanting


def _project(species_count: int, quantity: int, spacing: float) -> Project:
    return Project(species=[
        SpeciesPlanting(name=f"sp{i}", quantity=quantity, spacing=spacing)
        for i in range(species_count)
    ])


class TestScoreComponents:
    def test_density_bonus_peaks_at_optimum(self) -> None:
        assert density_bonus(1000) == 30
        assert density_bonus(500) == pytest.approx(15)
        assert density_bonus(1500) == pytest.approx(15)
        assert density_bonus(5000) < 0

    def test_first_threshold_met_wins(self) -> None:
        assert impact_level(80)["level"] == "High"
        assert impact_level(79.99)["level"] == "Medium"
        assert impact_level(40)["level"] == "Low"
        assert impact_level(0)["level"] == "Minimal"


class TestBiodiversityImpact:
    def test_small_two_species_project(self) -> None:
        impact = calculate_biodiversity_impact(Project(species=[
            SpeciesPlanting(name="Acacia", quantity=100, survival_rate=90),
            SpeciesPlanting(name="Terminalia", quantity=50, survival_rate=70),
        ]))
        # 16 species + 4.5 density + 20 native + 0.75 area
        assert impact.score == 41
        assert impact.level == "Low"
        assert impact.color == "#ef4444"
        assert impact.metrics.species_diversity == 2
        assert impact.metrics.tree_density == 150.0
        assert impact.metrics.area_hectares == 0.38
        assert impact.metrics.native_species_ratio == 1.0
        actions = [r.action for r in impact.recommendations]
        assert actions == [
            "Increase species diversity",
            "Consider understory planting",
            "Expand project area if possible",
        ]
        assert [r.priority for r in impact.recommendations] == ["high", "medium", "low"]

    def test_optimal_project_scores_high(self) -> None:
        # 10 m^2 per tree gives exactly 1000 trees/ha over 10 ha
        impact = calculate_biodiversity_impact(_project(5, 2000, 10 ** 0.5))
        assert impact.score == 100
        assert impact.level == "High"
        assert impact.recommendations == []

    def test_overcrowded_project_clamps_to_zero(self) -> None:
        impact = calculate_biodiversity_impact(_project(1, 1_000_000, 0.01))
        assert impact.score == 0
        assert impact.level == "Minimal"

    def test_empty_snapshot(self) -> None:
        impact = calculate_biodiversity_impact(Project(analytics=AnalyticsSnapshot()))
        assert impact.score == 20
        assert impact.metrics.tree_density == 0
        assert len(impact.recommendations) == 3

    def test_score_always_within_bounds(self) -> None:
        rng = random.Random(11)
        for _ in range(300):
            project = _project(
                rng.randint(1, 12), rng.randint(1, 50_000), rng.choice([0.5, 1, 2, 3, 5, 8, 15])
            )
            impact = calculate_biodiversity_impact(project)
            assert 0 <= impact.score <= 100
