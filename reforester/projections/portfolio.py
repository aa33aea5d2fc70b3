"""Cross-project rollups: portfolio overview and comparative ranking."""

from __future__ import annotations

from collections import Counter
from typing import Sequence

from reforester.projections.models import (
    ComparisonEntry,
    PortfolioOverview,
    PortfolioTotals,
    Project,
    SpeciesCount,
)
from reforester.utils import round_half_up

TRACKED_STATUSES = ("planning", "active", "completed", "on-hold")
TOP_SPECIES_LIMIT = 10


def portfolio_overview(projects: Sequence[Project]) -> PortfolioOverview:
    """Totals, status distribution and most-planted species across projects.

    A project without a survival rate counts as 0 toward the mean, so the
    average is taken over every project rather than only planted ones.
    """
    count = len(projects)
    totals = PortfolioTotals(
        total_projects=count,
        active_projects=sum(1 for p in projects if p.status == "active"),
        total_trees=sum(p.analytics.total_trees for p in projects),
        total_area=sum(p.analytics.area_covered for p in projects),
        total_carbon=sum(p.analytics.estimated_carbon_sequestration for p in projects),
        average_survival_rate=(
            sum(p.analytics.survival_rate or 0 for p in projects) / count if count else 0.0
        ),
    )

    status_distribution = {status: 0 for status in TRACKED_STATUSES}
    for project in projects:
        if project.status in status_distribution:
            status_distribution[project.status] += 1

    planted: Counter[str] = Counter()
    for project in projects:
        for species in project.species:
            planted[species.name] += species.quantity

    return PortfolioOverview(
        overview=totals,
        status_distribution=status_distribution,
        top_species=[
            SpeciesCount(name=name, count=n) for name, n in planted.most_common(TOP_SPECIES_LIMIT)
        ],
    )


def comparison_value(project: Project, metric: str) -> float:
    analytics = project.analytics
    if metric == "carbon_sequestration":
        return analytics.estimated_carbon_sequestration
    if metric == "cost_efficiency":
        # Trees per currency unit; zero counts are treated as 1
        trees = analytics.total_trees or 1
        cost = project.budget.estimated_cost or 1
        return trees / cost
    if metric == "biodiversity":
        return len(project.species)
    if metric == "area":
        return analytics.area_covered
    return analytics.total_trees


def comparative_analytics(
    projects: Sequence[Project],
    metric: str = "carbon_sequestration",
) -> list[ComparisonEntry]:
    """Rank projects by ``metric``, highest value first.

    Unknown metrics fall back to total trees planted.
    """
    entries = [
        ComparisonEntry(
            project_id=project.id,
            project_name=project.name,
            value=round_half_up(comparison_value(project, metric), 2),
            status=project.status,
            species_count=len(project.species),
        )
        for project in projects
    ]
    return sorted(entries, key=lambda entry: entry.value, reverse=True)
