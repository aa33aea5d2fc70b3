"""Financial efficiency and carbon-credit ROI for a project."""

from __future__ import annotations

from reforester.projections.constants import (
    CARBON_CREDIT_RATE_USD,
    CARBON_PAYBACK_YEARS,
    CO2_PER_CAR_TONS_YEAR,
    MATURITY_YEARS,
    O2_PER_TREE_KG_YEAR,
)
from reforester.projections.growth import annual_carbon_tons, surviving_trees
from reforester.projections.models import (
    ActionItem,
    Efficiency,
    EnvironmentalEquivalents,
    FinancialAnalytics,
    Financials,
    Project,
    ReturnOnInvestment,
)
from reforester.utils import round_half_up

GRANT_SUGGESTION_COST_USD = 1000
TARGET_SURVIVAL_RATE = 80


def financial_recommendations(project: Project, roi: float) -> list[ActionItem]:
    recommendations: list[ActionItem] = []
    budget = project.budget

    if roi < 0:
        recommendations.append(ActionItem(
            priority="high",
            action="Review cost structure",
            description="Consider local species and community involvement to reduce costs",
            impact="Potential cost reduction 20-40%",
        ))
    if budget.funding_source == "personal" and budget.estimated_cost > GRANT_SUGGESTION_COST_USD:
        recommendations.append(ActionItem(
            priority="medium",
            action="Explore grant opportunities",
            description="Research environmental grants and carbon credit programs",
            impact="Potential funding support",
        ))
    if (project.analytics.survival_rate or 0) < TARGET_SURVIVAL_RATE:
        recommendations.append(ActionItem(
            priority="high",
            action="Improve survival rates",
            description="Better planting techniques and maintenance can improve ROI significantly",
            impact="20-30% better financial returns",
        ))
    return recommendations


def calculate_financial_analytics(project: Project) -> FinancialAnalytics:
    """Cost efficiency, carbon-credit value and ROI.

    ROI is 0 and the payback period is ``None`` when the estimated cost is
    zero; no division by zero is attempted.
    """
    budget = project.budget
    analytics = project.analytics
    estimated = budget.estimated_cost
    actual = budget.actual_cost
    spent = actual if actual is not None else estimated
    carbon = analytics.estimated_carbon_sequestration

    cost_per_tree = spent / analytics.total_trees if analytics.total_trees > 0 else 0.0
    cost_per_ton = spent / carbon if carbon > 0 else 0.0
    credit_value = carbon * CARBON_CREDIT_RATE_USD

    roi = (credit_value - estimated) / estimated * 100 if estimated > 0 else 0.0
    payback = None
    if estimated > 0 and credit_value > 0:
        payback = round_half_up(estimated / (credit_value / CARBON_PAYBACK_YEARS), 1)

    actual_or_zero = actual or 0.0
    variance = actual_or_zero - estimated
    variance_pct = variance / estimated * 100 if estimated > 0 else 0.0

    return FinancialAnalytics(
        financials=Financials(
            estimated_cost=round_half_up(estimated, 2),
            actual_cost=round_half_up(actual_or_zero, 2),
            cost_variance=round_half_up(variance, 2),
            cost_variance_percentage=round_half_up(variance_pct, 1),
        ),
        efficiency=Efficiency(
            cost_per_tree=round_half_up(cost_per_tree, 2),
            cost_per_ton_carbon=round_half_up(cost_per_ton, 2),
            carbon_credit_value=round_half_up(credit_value, 2),
        ),
        roi=ReturnOnInvestment(
            percentage=round_half_up(roi, 1),
            net_value=round_half_up(credit_value - estimated, 2),
            payback_period=payback,
        ),
        recommendations=financial_recommendations(project, roi),
    )


def environmental_equivalents(project: Project) -> EnvironmentalEquivalents:
    """Yearly oxygen output and car-equivalent offset of the mature stand."""
    analytics = project.analytics
    survivors = surviving_trees(analytics)
    carbon = annual_carbon_tons(analytics, MATURITY_YEARS)
    return EnvironmentalEquivalents(
        mature_surviving_trees=int(round_half_up(survivors)),
        annual_carbon_tons=round_half_up(carbon, 2),
        annual_oxygen_tons=round_half_up(survivors * O2_PER_TREE_KG_YEAR / 1000, 2),
        cars_offset=round_half_up(carbon / CO2_PER_CAR_TONS_YEAR, 1),
    )
