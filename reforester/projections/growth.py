"""20-year growth projection and carbon timeline.

Both outputs derive annual carbon from :func:`annual_carbon_tons`, so the
carbon value for year ``y`` in the growth projection always equals the
annual carbon of the timeline entry for the same year.

Survival is static across years: the model does not simulate further
die-off once the snapshot rate is applied.
"""

from __future__ import annotations

import datetime as dt

from reforester.projections.constants import (
    BIODIVERSITY_PROXY_BASE,
    BIODIVERSITY_PROXY_PER_YEAR,
    CO2_PER_TREE_KG_YEAR,
    DEFAULT_SURVIVAL_RATE,
    HEIGHT_GROWTH_M_PER_YEAR,
    INITIAL_HEIGHT_M,
    MATURITY_YEARS,
    MAX_HEIGHT_M,
    PROJECTION_YEARS,
)
from reforester.projections.models import (
    AnalyticsSnapshot,
    CarbonTimelineEntry,
    GrowthProjectionPoint,
    Project,
)
from reforester.utils import round_half_up


def maturity_factor(year: int, maturity_years: int = MATURITY_YEARS) -> float:
    return min(1.0, year / maturity_years)


def effective_survival_rate(analytics: AnalyticsSnapshot) -> float:
    if analytics.survival_rate is None:
        return DEFAULT_SURVIVAL_RATE
    return analytics.survival_rate


def surviving_trees(analytics: AnalyticsSnapshot) -> float:
    return analytics.total_trees * (effective_survival_rate(analytics) / 100)


def annual_carbon_tons(analytics: AnalyticsSnapshot, year: int) -> float:
    """Tons of CO2 sequestered in ``year`` by the surviving stand."""
    return surviving_trees(analytics) * CO2_PER_TREE_KG_YEAR * maturity_factor(year) / 1000


def add_years(start: dt.date, years: int) -> dt.date:
    try:
        return start.replace(year=start.year + years)
    except ValueError:
        # Feb 29 in a non-leap target year
        return start.replace(year=start.year + years, day=28)


def project_growth(project: Project) -> list[GrowthProjectionPoint]:
    """Yearly growth projection for years 0..20 inclusive."""
    analytics = project.analytics
    survivors = surviving_trees(analytics)
    start = project.timeline.start_date

    points = []
    for year in range(PROJECTION_YEARS + 1):
        factor = maturity_factor(year)
        points.append(GrowthProjectionPoint(
            year=year,
            date=add_years(start, year),
            surviving_trees=int(round_half_up(survivors)),
            carbon_sequestration=round_half_up(annual_carbon_tons(analytics, year), 2),
            avg_height=round_half_up(min(MAX_HEIGHT_M, INITIAL_HEIGHT_M + year * HEIGHT_GROWTH_M_PER_YEAR), 1),
            canopy_coverage=round_half_up(analytics.area_covered * factor, 2),
            biodiversity_score=min(100, BIODIVERSITY_PROXY_BASE + year * BIODIVERSITY_PROXY_PER_YEAR),
        ))
    return points


def carbon_timeline(project: Project) -> list[CarbonTimelineEntry]:
    """Yearly annual and cumulative carbon, labelled ``Year 1`` .. ``Year 21``."""
    analytics = project.analytics
    survivors = surviving_trees(analytics)
    start = project.timeline.start_date

    timeline = []
    cumulative = 0.0
    for year in range(PROJECTION_YEARS + 1):
        annual = annual_carbon_tons(analytics, year)
        cumulative += annual
        timeline.append(CarbonTimelineEntry(
            period=f"Year {year + 1}",
            date=add_years(start, year),
            annual_carbon=round_half_up(annual, 2),
            cumulative_carbon=round_half_up(cumulative, 2),
            trees_active=int(round_half_up(survivors * maturity_factor(year))),
        ))
    return timeline
