"""
Configuration management for ReForester

Loads settings from:
1. config/config.yaml (optional)
2. Environment variables (.env), prefixed with REFORESTER_
3. Default values
"""

from pathlib import Path
from typing import Literal, Optional

import yaml
from dotenv import load_dotenv
from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


# Load environment variables
load_dotenv()

_DEFAULT_YAML = Path(__file__).parent.parent / "config" / "config.yaml"


class ReforesterSettings(BaseSettings):
    """Central configuration for the estimation and projection engine."""

    model_config = SettingsConfigDict(
        env_prefix="REFORESTER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # --- Soil source (ISRIC SoilGrids) ---
    soil_api_url: str = Field(default="https://rest.isric.org/soilgrids/v2.0")
    soil_timeout: float = Field(default=4.0, gt=0, description="Soil request timeout (seconds)")
    soil_cache_ttl: float = Field(default=30 * 60, gt=0, description="Soil cache TTL (seconds)")

    # --- Weather source (Open-Meteo) ---
    weather_api_url: str = Field(default="https://api.open-meteo.com/v1")
    weather_timeout: float = Field(default=5.0, gt=0, description="Weather request timeout (seconds)")
    weather_cache_ttl: float = Field(default=15 * 60, gt=0, description="Weather cache TTL (seconds)")

    # --- Advisory LLM ---
    llm_provider: Literal["anthropic", "openai", "deepseek", "ollama"] = "anthropic"
    llm_api_key: str = Field(
        default="",
        validation_alias=AliasChoices("REFORESTER_LLM_API_KEY", "CLAUDE_API_KEY", "llm_api_key"),
    )
    llm_base_url: str = Field(default="")
    llm_model: str = Field(default="")
    llm_timeout: float = Field(default=30.0, gt=0)
    llm_max_tokens: int = Field(default=1024, ge=1)
    llm_temperature: float = Field(default=0.7, ge=0.0, le=2.0)

    # --- Recommendation ---
    recommendation_cache_ttl: float = Field(default=15 * 60, gt=0)
    fallback_enabled: bool = Field(
        default=True,
        description="Degrade to the mock recommendation when the advisory call fails",
    )

    # --- Logging ---
    log_level: str = Field(default="INFO")
    log_file: Optional[Path] = None

    @property
    def advisory_configured(self) -> bool:
        """True when a credential for the advisory API is present."""
        return bool(self.llm_api_key.strip())

    @classmethod
    def from_yaml(cls, yaml_path: str | Path = _DEFAULT_YAML) -> "ReforesterSettings":
        """Load configuration from a YAML file, falling back to env/defaults."""
        yaml_path = Path(yaml_path)
        if not yaml_path.exists():
            return cls()

        with open(yaml_path, encoding="utf-8") as f:
            config_data = yaml.safe_load(f) or {}

        return cls(**config_data)


# Global configuration instance
_config: Optional[ReforesterSettings] = None


def get_config() -> ReforesterSettings:
    """Get or create the global configuration instance"""
    global _config
    if _config is None:
        _config = ReforesterSettings.from_yaml()
    return _config


def reload_config(yaml_path: Optional[str | Path] = None) -> ReforesterSettings:
    """Reload configuration from file"""
    global _config
    _config = ReforesterSettings.from_yaml(yaml_path) if yaml_path else ReforesterSettings.from_yaml()
    return _config
