"""
Environmental and financial constants for the projection engine.
Simplified planning values, not a calibrated ecological model.
"""

# Price per ton of sequestered CO2 on the voluntary carbon market (USD)
CARBON_CREDIT_RATE_USD = 50

# Average kg of CO2 sequestered per tree per year at maturity
CO2_PER_TREE_KG_YEAR = 22

# Average kg of O2 produced per tree per year at maturity
O2_PER_TREE_KG_YEAR = 260

# Average metric tons of CO2 emitted per passenger car per year
CO2_PER_CAR_TONS_YEAR = 4.6

# Tree survival rate (%) used when a project has no planted species yet
DEFAULT_SURVIVAL_RATE = 85

# Years for a tree to reach full sequestration capacity
MATURITY_YEARS = 10

# Horizon (years) over which carbon credits repay the initial cost
CARBON_PAYBACK_YEARS = 20

# Growth projection horizon, inclusive of year 0
PROJECTION_YEARS = 20

# Height model: metres at planting, metres per year, canopy ceiling
INITIAL_HEIGHT_M = 2.0
HEIGHT_GROWTH_M_PER_YEAR = 2.3
MAX_HEIGHT_M = 25.0

# Age-proxy biodiversity curve used by the growth projection
BIODIVERSITY_PROXY_BASE = 20
BIODIVERSITY_PROXY_PER_YEAR = 8

# Trees per hectare treated as optimal stocking density
OPTIMAL_DENSITY_TREES_HA = 1000

SQUARE_METRES_PER_HECTARE = 10_000

# Biodiversity impact levels, highest threshold first
BIODIVERSITY_LEVELS: tuple[dict, ...] = (
    {"threshold": 80, "level": "High", "color": "#10b981", "description": "Excellent biodiversity impact"},
    {"threshold": 60, "level": "Medium", "color": "#f59e0b", "description": "Good biodiversity impact"},
    {"threshold": 40, "level": "Low", "color": "#ef4444", "description": "Moderate biodiversity impact"},
    {"threshold": 0, "level": "Minimal", "color": "#6b7280", "description": "Limited biodiversity impact"},
)
