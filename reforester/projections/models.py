"""Pydantic v2 models for projects and projection outputs.

Output models serialize to camelCase with ``model_dump(by_alias=True)``.
"""

from __future__ import annotations

import datetime as dt
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ---------------------------------------------------------------------------
# Project inputs (owned by the persistence layer, read-only here)
# ---------------------------------------------------------------------------

class SpeciesPlanting(_CamelModel):
    name: str
    scientific_name: str = ""
    quantity: int = Field(default=1, ge=1)
    spacing: float = Field(default=5.0, gt=0, description="Metres between trees")
    survival_rate: float = Field(default=85.0, ge=0, le=100)


class Milestone(_CamelModel):
    name: str = ""
    completed: bool = False


class Timeline(_CamelModel):
    start_date: dt.date = Field(default_factory=dt.date.today)
    end_date: dt.date | None = None
    milestones: list[Milestone] = Field(default_factory=list)


class Budget(_CamelModel):
    estimated_cost: float = Field(default=0.0, ge=0)
    actual_cost: float | None = Field(default=None, ge=0)
    currency: str = "USD"
    funding_source: str | None = None


class SpeciesSummary(_CamelModel):
    name: str
    quantity: int
    survival_rate: float


class AnalyticsSnapshot(_CamelModel):
    """Derived project metrics. Recomputed by the owner whenever species,
    timeline or budget change; never mutated by the projection engine."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    total_trees: int = 0
    area_covered: float = 0.0
    estimated_carbon_sequestration: float = 0.0
    survival_rate: float | None = None
    progress: float = 0.0
    species_list: list[SpeciesSummary] = Field(default_factory=list)


ProjectStatus = Literal["planning", "active", "completed", "on-hold", "cancelled"]


class Project(_CamelModel):
    id: str = ""
    name: str = ""
    status: ProjectStatus = "planning"
    species: list[SpeciesPlanting] = Field(default_factory=list)
    timeline: Timeline = Field(default_factory=Timeline)
    budget: Budget = Field(default_factory=Budget)
    analytics: AnalyticsSnapshot | None = None

    @model_validator(mode="after")
    def derive_analytics(self) -> "Project":
        if self.analytics is None:
            from reforester.projections.analytics import build_analytics

            self.analytics = build_analytics(self.species, self.timeline.milestones)
        return self


# ---------------------------------------------------------------------------
# Outputs
# ---------------------------------------------------------------------------

class GrowthProjectionPoint(_CamelModel):
    year: int
    date: dt.date
    surviving_trees: int
    carbon_sequestration: float
    avg_height: float
    canopy_coverage: float
    biodiversity_score: float


class CarbonTimelineEntry(_CamelModel):
    period: str
    date: dt.date
    annual_carbon: float
    cumulative_carbon: float
    trees_active: int


class ActionItem(_CamelModel):
    priority: Literal["high", "medium", "low"]
    action: str
    description: str
    impact: str


class BiodiversityMetrics(_CamelModel):
    species_diversity: int
    tree_density: float
    area_hectares: float
    native_species_ratio: float


class BiodiversityImpact(_CamelModel):
    score: int = Field(..., ge=0, le=100)
    level: Literal["Minimal", "Low", "Medium", "High"]
    color: str
    description: str
    metrics: BiodiversityMetrics
    recommendations: list[ActionItem] = Field(default_factory=list)


class Financials(_CamelModel):
    estimated_cost: float
    actual_cost: float
    cost_variance: float
    cost_variance_percentage: float


class Efficiency(_CamelModel):
    cost_per_tree: float
    cost_per_ton_carbon: float
    carbon_credit_value: float


class ReturnOnInvestment(_CamelModel):
    percentage: float
    net_value: float
    payback_period: float | None = Field(
        default=None, description="Years; None when estimated cost or credit value is zero"
    )


class FinancialAnalytics(_CamelModel):
    financials: Financials
    efficiency: Efficiency
    roi: ReturnOnInvestment
    recommendations: list[ActionItem] = Field(default_factory=list)


class EnvironmentalEquivalents(_CamelModel):
    mature_surviving_trees: int
    annual_carbon_tons: float
    annual_oxygen_tons: float
    cars_offset: float


# ---------------------------------------------------------------------------
# Portfolio outputs
# ---------------------------------------------------------------------------

class PortfolioTotals(_CamelModel):
    total_projects: int
    active_projects: int
    total_trees: int
    total_area: float
    total_carbon: float
    average_survival_rate: float


class SpeciesCount(_CamelModel):
    name: str
    count: int


class PortfolioOverview(_CamelModel):
    overview: PortfolioTotals
    status_distribution: dict[str, int]
    top_species: list[SpeciesCount] = Field(default_factory=list)


ComparisonMetric = Literal["carbon_sequestration", "cost_efficiency", "biodiversity", "area", "total_trees"]


class ComparisonEntry(_CamelModel):
    project_id: str
    project_name: str
    value: float
    status: ProjectStatus
    species_count: int
