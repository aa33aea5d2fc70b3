"""Planting recommendation: advisory LLM with a deterministic mock fallback."""

from reforester.advisory.mock import Biome, determine_biome, list_biomes
from reforester.advisory.models import Recommendation
from reforester.advisory.recommender import RecommendationGenerator

__all__ = [
    "Biome",
    "Recommendation",
    "RecommendationGenerator",
    "determine_biome",
    "list_biomes",
]
