"""Tests for reforester/projections/financial.py ROI and equivalents."""

from __future__ import annotations

import pytest

from reforester.projections.financial import (
    calculate_financial_analytics,
    environmental_equivalents,
)
from reforester.projections.models import AnalyticsSnapshot, Budget, Project, SpeciesPlanting


def _project(budget: Budget, survival: float = 90) -> Project:
    return Project(
        species=[SpeciesPlanting(name="Acacia", quantity=150, survival_rate=survival)],
        budget=budget,
    )


class TestFinancialAnalytics:
    def test_efficiency_and_roi(self) -> None:
        result = calculate_financial_analytics(_project(Budget(estimated_cost=1000)))
        # 150 trees -> 3.3 t CO2/yr -> $165 in credits
        assert result.efficiency.cost_per_tree == pytest.approx(6.67)
        assert result.efficiency.cost_per_ton_carbon == pytest.approx(303.03)
        assert result.efficiency.carbon_credit_value == pytest.approx(165.0)
        assert result.roi.percentage == pytest.approx(-83.5)
        assert result.roi.net_value == pytest.approx(-835.0)
        assert result.roi.payback_period == pytest.approx(121.2)
        assert [r.action for r in result.recommendations] == ["Review cost structure"]

    def test_actual_cost_drives_efficiency_and_variance(self) -> None:
        result = calculate_financial_analytics(_project(Budget(estimated_cost=1000, actual_cost=1200)))
        assert result.efficiency.cost_per_tree == pytest.approx(8.0)
        assert result.financials.actual_cost == 1200
        assert result.financials.cost_variance == 200
        assert result.financials.cost_variance_percentage == 20.0

    def test_zero_estimated_cost_has_no_roi_or_payback(self) -> None:
        result = calculate_financial_analytics(_project(Budget(estimated_cost=0)))
        assert result.roi.percentage == 0
        assert result.roi.payback_period is None
        assert result.efficiency.cost_per_tree == 0
        assert result.financials.cost_variance_percentage == 0

    def test_personal_funding_suggests_grants(self) -> None:
        result = calculate_financial_analytics(
            _project(Budget(estimated_cost=5000, funding_source="personal"))
        )
        assert "Explore grant opportunities" in [r.action for r in result.recommendations]

    def test_low_survival_suggests_better_planting(self) -> None:
        result = calculate_financial_analytics(_project(Budget(estimated_cost=10), survival=60))
        actions = [r.action for r in result.recommendations]
        assert actions == ["Improve survival rates"]

    def test_unknown_survival_counts_as_low(self) -> None:
        project = Project(analytics=AnalyticsSnapshot(total_trees=0), budget=Budget(estimated_cost=0))
        result = calculate_financial_analytics(project)
        assert "Improve survival rates" in [r.action for r in result.recommendations]
        assert result.efficiency.cost_per_ton_carbon == 0

    def test_camel_case_dump(self) -> None:
        dumped = calculate_financial_analytics(_project(Budget(estimated_cost=0))).model_dump(by_alias=True)
        assert dumped["roi"]["paybackPeriod"] is None
        assert "costPerTonCarbon" in dumped["efficiency"]
        assert "costVariancePercentage" in dumped["financials"]


class TestEnvironmentalEquivalents:
    def test_mature_stand(self) -> None:
        project = Project(species=[
            SpeciesPlanting(name="Acacia", quantity=100, survival_rate=90),
            SpeciesPlanting(name="Terminalia", quantity=50, survival_rate=70),
        ])
        eq = environmental_equivalents(project)
        assert eq.mature_surviving_trees == 125
        assert eq.annual_carbon_tons == pytest.approx(2.75)
        assert eq.annual_oxygen_tons == pytest.approx(32.5)
        assert eq.cars_offset == pytest.approx(0.6)
