"""Shared test fixtures for the ReForester test suite."""

import os
from datetime import date

import pytest

# Ensure no real advisory credential leaks in before any config import
os.environ.pop("CLAUDE_API_KEY", None)
os.environ["REFORESTER_LLM_API_KEY"] = ""
os.environ.setdefault("REFORESTER_LOG_LEVEL", "WARNING")

from reforester.cache import ExpiringCache  # noqa: E402
from reforester.config import ReforesterSettings  # noqa: E402
from reforester.environment.models import Coordinate  # noqa: E402
from tests.fakes import FakeClock  # noqa: E402


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def cache(clock):
    return ExpiringCache(default_ttl=900, clock=clock)


@pytest.fixture
def settings():
    """Settings with no advisory credential and short deadlines."""
    return ReforesterSettings(
        _env_file=None,
        llm_api_key="",
        soil_timeout=0.5,
        weather_timeout=0.5,
        llm_timeout=0.5,
    )


@pytest.fixture
def nairobi():
    return Coordinate(lat=-1.29, lon=36.82)


@pytest.fixture
def fixed_today():
    return lambda: date(2024, 6, 1)


@pytest.fixture
def sample_soil():
    return {"clay": 22, "sand": 60, "silt": 18}


@pytest.fixture
def sample_weather():
    return {"temperature": 24, "precipitation": 2, "minTemperature": 18, "maxTemperature": 29}
