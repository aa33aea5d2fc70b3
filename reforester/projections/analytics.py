"""Analytics snapshot derivation for a project's planted species.

The persistence layer calls :func:`build_analytics` whenever a project's
species, timeline or budget change. The projection engine only reads the
resulting snapshot.
"""

from __future__ import annotations

from typing import Sequence

from reforester.projections.constants import CO2_PER_TREE_KG_YEAR, SQUARE_METRES_PER_HECTARE
from reforester.projections.models import AnalyticsSnapshot, Milestone, SpeciesPlanting, SpeciesSummary


def weighted_survival_rate(species: Sequence[SpeciesPlanting]) -> float | None:
    """Quantity-weighted mean survival rate (%), or None with no trees."""
    total = sum(s.quantity for s in species)
    if total <= 0:
        return None
    surviving = sum(s.quantity * (s.survival_rate / 100) for s in species)
    return surviving / total * 100


def build_analytics(
    species: Sequence[SpeciesPlanting],
    milestones: Sequence[Milestone] = (),
) -> AnalyticsSnapshot:
    total_trees = sum(s.quantity for s in species)

    # Area from mean spacing: each tree occupies spacing^2 square metres
    area_covered = 0.0
    if species:
        avg_spacing = sum(s.spacing for s in species) / len(species)
        area_covered = total_trees * avg_spacing ** 2 / SQUARE_METRES_PER_HECTARE

    progress = 0.0
    if milestones:
        progress = sum(1 for m in milestones if m.completed) / len(milestones) * 100

    return AnalyticsSnapshot(
        total_trees=total_trees,
        area_covered=area_covered,
        estimated_carbon_sequestration=total_trees * CO2_PER_TREE_KG_YEAR / 1000,
        survival_rate=weighted_survival_rate(species),
        progress=progress,
        species_list=[
            SpeciesSummary(name=s.name, quantity=s.quantity, survival_rate=s.survival_rate)
            for s in species
        ],
    )
