"""Deterministic projections driven by a project's analytics snapshot."""

from reforester.projections.analytics import build_analytics, weighted_survival_rate
from reforester.projections.biodiversity import calculate_biodiversity_impact
from reforester.projections.financial import calculate_financial_analytics, environmental_equivalents
from reforester.projections.growth import carbon_timeline, project_growth
from reforester.projections.models import Project
from reforester.projections.portfolio import comparative_analytics, portfolio_overview

__all__ = [
    "Project",
    "build_analytics",
    "calculate_biodiversity_impact",
    "calculate_financial_analytics",
    "carbon_timeline",
    "comparative_analytics",
    "environmental_equivalents",
    "portfolio_overview",
    "project_growth",
    "weighted_survival_rate",
]
