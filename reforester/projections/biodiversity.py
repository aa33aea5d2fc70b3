"""Biodiversity impact scoring for a planted project.

score = clamp(0, 100, species + density + native + area bonuses)

- species: 8 points per species, capped at 40
- density: up to 30 points, peaking at 1000 trees/ha (negative when far off)
- native: fixed 20 (all species are currently assumed native)
- area: 2 points per hectare, capped at 10

This is independent of the age-proxy curve in the growth projection; the
two are not reconciled.
"""

from __future__ import annotations

from reforester.projections.constants import BIODIVERSITY_LEVELS, OPTIMAL_DENSITY_TREES_HA
from reforester.projections.models import (
    ActionItem,
    BiodiversityImpact,
    BiodiversityMetrics,
    Project,
)
from reforester.utils import clamp, round_half_up

NATIVE_SPECIES_BONUS = 20
NATIVE_SPECIES_RATIO = 1.0


def species_bonus(species_count: int) -> float:
    return min(40, species_count * 8)


def density_bonus(density: float) -> float:
    return min(30, 30 * (1 - abs(density - OPTIMAL_DENSITY_TREES_HA) / OPTIMAL_DENSITY_TREES_HA))


def area_bonus(area_ha: float) -> float:
    return min(10, area_ha * 2)


def impact_level(score: float) -> dict:
    """First level (descending thresholds) the score meets or exceeds."""
    for level in BIODIVERSITY_LEVELS:
        if score >= level["threshold"]:
            return level
    return BIODIVERSITY_LEVELS[-1]


def biodiversity_recommendations(species_count: int, area_ha: float, score: float) -> list[ActionItem]:
    recommendations: list[ActionItem] = []
    if species_count < 3:
        recommendations.append(ActionItem(
            priority="high",
            action="Increase species diversity",
            description="Add more native tree species to improve ecosystem resilience",
            impact="High biodiversity improvement",
        ))
    if score < 60:
        recommendations.append(ActionItem(
            priority="medium",
            action="Consider understory planting",
            description="Add shrubs and ground cover to create multi-layer forest structure",
            impact="Medium biodiversity improvement",
        ))
    if area_ha < 5:
        recommendations.append(ActionItem(
            priority="low",
            action="Expand project area if possible",
            description="Larger contiguous areas support more wildlife species",
            impact="Long-term biodiversity improvement",
        ))
    return recommendations


def calculate_biodiversity_impact(project: Project) -> BiodiversityImpact:
    analytics = project.analytics
    species_count = len(project.species) or len(analytics.species_list)
    area = analytics.area_covered
    # Density denominator is floored at 1 ha
    density = analytics.total_trees / max(area, 1.0)

    raw = species_bonus(species_count) + density_bonus(density) + NATIVE_SPECIES_BONUS + area_bonus(area)
    score = clamp(raw, 0, 100)
    level = impact_level(score)

    return BiodiversityImpact(
        score=int(round_half_up(score)),
        level=level["level"],
        color=level["color"],
        description=level["description"],
        metrics=BiodiversityMetrics(
            species_diversity=species_count,
            tree_density=round_half_up(density, 1),
            area_hectares=round_half_up(area, 2),
            native_species_ratio=NATIVE_SPECIES_RATIO,
        ),
        recommendations=biodiversity_recommendations(species_count, area, score),
    )
