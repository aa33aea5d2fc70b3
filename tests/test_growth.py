"""Tests for analytics derivation, growth projection and carbon timeline."""

from __future__ import annotations

from datetime import date

import pytest

from reforester.projections.analytics import build_analytics, weighted_survival_rate
from reforester.projections.growth import add_years, carbon_timeline, project_growth
from reforester.projections.models import (
    AnalyticsSnapshot,
    Milestone,
    Project,
    SpeciesPlanting,
    Timeline,
)


def _scenario_project(**overrides) -> Project:
    data = dict(
        id="p1",
        name="Riverbank",
        species=[
            SpeciesPlanting(name="Acacia", quantity=100, survival_rate=90),
            SpeciesPlanting(name="Terminalia", quantity=50, survival_rate=70),
        ],
        timeline=Timeline(start_date=date(2024, 3, 1)),
    )
    data.update(overrides)
    return Project(**data)


# ---------------------------------------------------------------------------
# 1. Analytics snapshot
# ---------------------------------------------------------------------------
class TestAnalyticsSnapshot:
    def test_weighted_survival_scenario(self) -> None:
        analytics = _scenario_project().analytics
        assert analytics.total_trees == 150
        assert analytics.survival_rate == pytest.approx(83.33, abs=0.01)

    def test_area_and_carbon(self) -> None:
        analytics = _scenario_project().analytics
        # 150 trees at 5 m spacing
        assert analytics.area_covered == pytest.approx(0.375)
        assert analytics.estimated_carbon_sequestration == pytest.approx(3.3)

    def test_no_species(self) -> None:
        assert weighted_survival_rate([]) is None
        analytics = build_analytics([])
        assert analytics.total_trees == 0
        assert analytics.area_covered == 0
        assert analytics.survival_rate is None

    def test_progress_from_milestones(self) -> None:
        analytics = build_analytics(
            [SpeciesPlanting(name="Oak")],
            [Milestone(name="prep", completed=True), Milestone(name="plant"),
             Milestone(name="survey"), Milestone(name="handover", completed=True)],
        )
        assert analytics.progress == 50

    def test_supplied_snapshot_is_kept(self) -> None:
        snapshot = AnalyticsSnapshot(total_trees=10, area_covered=2.0, survival_rate=50)
        project = Project(analytics=snapshot)
        assert project.analytics is snapshot

    def test_camel_case_input(self) -> None:
        project = Project.model_validate({
            "species": [{"name": "Oak", "quantity": 10, "survivalRate": 60, "spacing": 4}],
            "budget": {"estimatedCost": 200, "fundingSource": "grant"},
            "timeline": {"startDate": "2024-01-15"},
        })
        assert project.analytics.survival_rate == 60
        assert project.budget.funding_source == "grant"


# ---------------------------------------------------------------------------
# 2. Growth projection
# ---------------------------------------------------------------------------
class TestGrowthProjection:
    def test_twenty_one_points(self) -> None:
        points = project_growth(_scenario_project())
        assert [p.year for p in points] == list(range(21))
        assert points[0].date == date(2024, 3, 1)
        assert points[20].date == date(2044, 3, 1)

    def test_values_at_maturity(self) -> None:
        points = project_growth(_scenario_project())
        assert points[10].surviving_trees == 125
        assert points[10].carbon_sequestration == pytest.approx(2.75)
        assert points[0].carbon_sequestration == 0
        assert points[0].avg_height == 2.0
        assert points[20].avg_height == 25.0
        assert points[0].biodiversity_score == 20
        assert points[10].biodiversity_score == 100

    def test_carbon_monotone_then_constant(self) -> None:
        carbon = [p.carbon_sequestration for p in project_growth(_scenario_project())]
        assert carbon[:11] == sorted(carbon[:11])
        assert len(set(carbon[10:])) == 1

    def test_canopy_grows_to_area(self) -> None:
        points = project_growth(_scenario_project())
        assert points[0].canopy_coverage == 0
        assert points[10].canopy_coverage == points[20].canopy_coverage == 0.38

    def test_missing_survival_defaults_to_85(self) -> None:
        project = Project(analytics=AnalyticsSnapshot(total_trees=100))
        assert project_growth(project)[5].surviving_trees == 85

    def test_camel_case_dump(self) -> None:
        dumped = project_growth(_scenario_project())[1].model_dump(mode="json", by_alias=True)
        assert set(dumped) == {
            "year", "date", "survivingTrees", "carbonSequestration",
            "avgHeight", "canopyCoverage", "biodiversityScore",
        }
        assert dumped["date"] == "2025-03-01"


# ---------------------------------------------------------------------------
# 3. Carbon timeline
# ---------------------------------------------------------------------------
class TestCarbonTimeline:
    def test_labels_and_length(self) -> None:
        timeline = carbon_timeline(_scenario_project())
        assert len(timeline) == 21
        assert timeline[0].period == "Year 1"
        assert timeline[20].period == "Year 21"

    def test_agrees_with_growth_projection(self) -> None:
        project = _scenario_project()
        growth = project_growth(project)
        timeline = carbon_timeline(project)
        for point, entry in zip(growth, timeline):
            assert point.carbon_sequestration == entry.annual_carbon

    def test_cumulative_is_running_sum(self) -> None:
        timeline = carbon_timeline(_scenario_project())
        cumulative = [e.cumulative_carbon for e in timeline]
        assert cumulative == sorted(cumulative)
        # 2.75 t/yr x (0.0 + 0.1 + ... + 0.9 + 11 mature years)
        assert cumulative[-1] == pytest.approx(42.63, abs=0.011)

    def test_trees_active_ramps_with_maturity(self) -> None:
        timeline = carbon_timeline(_scenario_project())
        assert timeline[0].trees_active == 0
        assert timeline[5].trees_active == 63
        assert timeline[10].trees_active == 125


def test_add_years_leap_day() -> None:
    assert add_years(date(2024, 2, 29), 1) == date(2025, 2, 28)
    assert add_years(date(2024, 2, 29), 4) == date(2028, 2, 29)
