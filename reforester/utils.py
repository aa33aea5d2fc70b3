"""
Utility functions for ReForester

Provides logging setup, numeric coercion and rounding helpers shared by the
environment pipeline and the projection engine.
"""

import logging
import math
from pathlib import Path
from typing import Any, Optional


# ═══════════════════════════════════════════════════════════════════
# LOGGING
# ═══════════════════════════════════════════════════════════════════

def setup_logging(log_level: str = "INFO", log_file: Optional[str | Path] = None) -> None:
    """Configure logging for ReForester"""
    level = getattr(logging, log_level.upper(), logging.INFO)

    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path))

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=handlers,
        force=True,
    )


def get_logger(name: str) -> logging.Logger:
    """Get logger instance for module"""
    return logging.getLogger(name)


# ═══════════════════════════════════════════════════════════════════
# NUMERIC HELPERS
# ═══════════════════════════════════════════════════════════════════

def safe_float(value: Any, default: float) -> float:
    """Coerce ``value`` to a finite float, returning ``default`` otherwise.

    Accepts ints, floats and numeric strings. Booleans, ``None``, NaN and
    infinities are rejected.
    """
    if isinstance(value, bool):
        return default
    if isinstance(value, (int, float)):
        result = float(value)
    elif isinstance(value, str):
        try:
            result = float(value.strip())
        except ValueError:
            return default
    else:
        return default
    return result if math.isfinite(result) else default


def round_half_up(value: float, ndigits: int = 0) -> float:
    """Round half away from zero (``round()`` uses banker's rounding)."""
    factor = 10 ** ndigits
    scaled = abs(value) * factor
    rounded = math.floor(scaled + 0.5) / factor
    return math.copysign(rounded, value) if value else 0.0


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))
