"""
ReForester - reforestation potential estimation and impact projection engine.

Aggregates soil and weather data for a coordinate, produces a planting
recommendation, and projects 20-year growth, carbon, biodiversity and
financial outcomes for planted projects.
"""

__version__ = "0.1.0"

from reforester.config import ReforesterSettings, get_config
from reforester.engine import ReforestationEngine

__all__ = [
    "ReforesterSettings",
    "ReforestationEngine",
    "get_config",
]
