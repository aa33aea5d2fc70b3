"""Environmental data pipeline: bounded live sources with geographic fallbacks."""

from reforester.environment.aggregator import AggregationResult, EnvironmentAggregator
from reforester.environment.models import (
    Coordinate,
    EnvironmentalSnapshot,
    Provenance,
    SoilComposition,
    SourceResult,
    SourceStatus,
    WeatherSnapshot,
)

__all__ = [
    "AggregationResult",
    "Coordinate",
    "EnvironmentAggregator",
    "EnvironmentalSnapshot",
    "Provenance",
    "SoilComposition",
    "SourceResult",
    "SourceStatus",
    "WeatherSnapshot",
]
