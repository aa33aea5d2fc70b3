"""Deterministic, biome-conditioned mock recommendation.

Used when no advisory credential is configured or when the advisory call
fails. The text depends only on the validated coordinate, soil and weather
values, so identical inputs always produce byte-identical output.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable

from reforester.environment.models import Coordinate, SoilComposition, WeatherSnapshot

MOCK_MODEL_ID = "mock-biome-based"
MOCK_SOURCE = "Mock AI (No API Key)"
MOCK_FALLBACK_SOURCE = "Mock AI (Advisory API unavailable)"


class Biome(str, Enum):
    tropical = "tropical"
    temperate = "temperate"
    boreal = "boreal"


@dataclass(frozen=True)
class BiomeProfile:
    biome: Biome
    latitude_range: str
    description: str
    species: tuple[str, ...]
    planting_season: str
    spacing: str


@dataclass(frozen=True)
class BiomeRule:
    matches: Callable[[float], bool]
    biome: Biome


BIOME_PROFILES: dict[Biome, BiomeProfile] = {
    Biome.tropical: BiomeProfile(
        biome=Biome.tropical,
        latitude_range="|Latitude| below 35°",
        description="Warm climates near equator",
        species=(
            "Acacia tortilis (Umbrella Thorn) - Drought resistant, nitrogen-fixing",
            "Commiphora africana (African Myrrh) - Medicinal, arid-adapted",
            "Terminalia brownii - Good for timber, soil stabilization",
            "Balanites aegyptiaca (Desert Date) - Edible fruits, very drought tolerant",
            "Faidherbia albida - Improves soil fertility, good for agroforestry",
        ),
        planting_season="Start of rainy season (March-April)",
        spacing="4m x 4m for trees, 2m x 2m for shrubs",
    ),
    Biome.temperate: BiomeProfile(
        biome=Biome.temperate,
        latitude_range="|Latitude| 35° to 60°",
        description="Moderate climates with distinct seasons",
        species=(
            "Quercus robur (English Oak) - Long-lived, high biodiversity value",
            "Fagus sylvatica (European Beech) - Shade tolerant, soil improvement",
            "Betula pendula (Silver Birch) - Pioneer species, fast growing",
            "Acer pseudoplatanus (Sycamore) - Resilient, good for wildlife",
            "Crataegus monogyna (Hawthorn) - Hedge plant, bird habitat",
        ),
        planting_season="Late autumn or early spring",
        spacing="5m x 5m for canopy trees, 3m x 3m for understory",
    ),
    Biome.boreal: BiomeProfile(
        biome=Biome.boreal,
        latitude_range="|Latitude| 60° to 90°",
        description="Cold climates with coniferous forests",
        species=(
            "Picea abies (Norway Spruce) - Cold tolerant, windbreak",
            "Pinus sylvestris (Scots Pine) - Adaptable, poor soil tolerant",
            "Betula pubescens (Downy Birch) - Frost resistant, pioneer species",
            "Larix decidua (European Larch) - Deciduous conifer, durable wood",
            "Sorbus aucuparia (Rowan) - Berry-producing, bird attractant",
        ),
        planting_season="Early spring after frost",
        spacing="3m x 3m for dense stands, 4m x 4m for mixed woodland",
    ),
}

# Evaluated top-to-bottom; first match wins
BIOME_RULES: tuple[BiomeRule, ...] = (
    BiomeRule(lambda lat: abs(lat) < 35, Biome.tropical),
    BiomeRule(lambda lat: abs(lat) < 60, Biome.temperate),
    BiomeRule(lambda lat: True, Biome.boreal),
)


def determine_biome(lat: float) -> Biome:
    for rule in BIOME_RULES:
        if rule.matches(lat):
            return rule.biome
    return BIOME_RULES[-1].biome


def list_biomes() -> list[dict[str, str]]:
    return [
        {"name": p.biome.value, "range": p.latitude_range, "description": p.description}
        for p in BIOME_PROFILES.values()
    ]


def soil_preparation_notes(soil: SoilComposition) -> list[str]:
    """Texture-driven soil preparation advice; independent rules may co-occur."""
    notes: list[str] = []
    if soil.clay > 30:
        notes.append("Add organic matter to improve drainage and reduce compaction")
        notes.append("Implement contour planting to prevent waterlogging")
    if soil.sand > 70:
        notes.append("Incorporate clay or compost to increase water retention")
        notes.append("Use mulch heavily to reduce evaporation")
    if soil.silt > 50:
        notes.append("Use cover crops to stabilize soil structure")
        notes.append("Avoid working soil when wet to prevent compaction")
    if soil.total < 95:
        notes.append("Consider soil testing for micronutrients and pH balance")
    if not notes:
        notes.append("Balanced texture - maintain structure with mulch and minimal tillage")
    return notes


def _bullets(lines: list[str] | tuple[str, ...]) -> str:
    return "\n".join(f"• {line}" for line in lines)


def build_mock_text(
    coordinate: Coordinate, soil: SoilComposition, weather: WeatherSnapshot
) -> str:
    """Compose the structured multi-section report for a location."""
    biome = determine_biome(coordinate.lat)
    profile = BIOME_PROFILES[biome]
    lat, lon = coordinate.lat, coordinate.lon

    sections = [
        f"REFORESTATION STRATEGY FOR {biome.value.upper()} REGION ({lat}, {lon})",
        (
            f"Based on your local conditions (Temperature: {weather.temperature}°C, "
            f"Rainfall: {weather.precipitation}mm, Biome: {biome.value}), "
            "here is a tailored reforestation approach:"
        ),
        "RECOMMENDED NATIVE SPECIES:\n" + _bullets(profile.species),
        "PLANTING STRATEGY:\n" + _bullets([
            f"Optimal planting season: {profile.planting_season}",
            f"Tree spacing: {profile.spacing}",
            "Companion plants: Leguminous plants for nitrogen fixation, native grasses for ground cover",
            "Planting method: Dig pits 2x root ball size, mix native soil with compost",
        ]),
        (
            "SOIL PREPARATION:\n"
            f"Your soil analysis (Clay: {soil.clay}%, Sand: {soil.sand}%, Silt: {soil.silt}%) suggests:\n"
            + _bullets(soil_preparation_notes(soil))
        ),
        "WATER MANAGEMENT:\n" + _bullets([
            "Construct swales or contour bunds for water harvesting",
            "Use drip irrigation for first year establishment",
            "Mulch with 10-15cm organic material to retain moisture",
            "Design drainage for heavy rainfall events",
        ]),
        "MAINTENANCE PLAN:\n" + _bullets([
            "First 3 months: Water twice weekly, monitor for pests",
            "Months 4-12: Water weekly during dry periods, weed control",
            "Year 2-3: Quarterly monitoring, formative pruning",
            "Protection: Tree guards against herbivores, wind protection if needed",
        ]),
        "EXPECTED BENEFITS:\n" + _bullets([
            "Soil organic matter increase: 1-2% over 3 years",
            "Carbon sequestration: 4-8 tons CO2/hectare/year",
            "Biodiversity: Habitat creation for local wildlife",
            "Water regulation: Improved infiltration and reduced runoff",
            "Microclimate: Temperature moderation and wind protection",
        ]),
        "MONITORING RECOMMENDATIONS:\n" + _bullets([
            "Monthly growth measurements for first year",
            "Soil health assessment every 6 months",
            "Biodiversity surveys annually",
            "Survival rate tracking at 6, 12, and 24 months",
        ]),
        (
            "CLIMATE CONSIDERATIONS:\n"
            f"Your local climate ({weather.min_temperature}°C to {weather.max_temperature}°C) "
            "requires species selection for temperature extremes. "
            "Ensure adequate water during establishment phase."
        ),
        (
            "CONTACT LOCAL EXPERTS:\n"
            "For species-specific recommendations, consult with local forestry departments, "
            "agricultural extension services, or native plant societies."
        ),
        (
            "Source: ReForester AI Analysis (Mock Data - For demonstration)\n"
            f"Region: {biome.value} biome | Coordinates: {lat}, {lon}"
        ),
    ]
    return "\n\n".join(sections)
