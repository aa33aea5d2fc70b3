"""Pydantic v2 models for planting recommendations."""

from pydantic import BaseModel, ConfigDict, Field


class Recommendation(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    text: str = Field(..., min_length=1)
    source: str = Field(..., min_length=1)
    model: str | None = None
    biome: str | None = None
    cached: bool = False
    fallback: bool | None = None
    processing_time_ms: int | None = Field(default=None, alias="processingTimeMs")
