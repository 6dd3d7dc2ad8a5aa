"""Activity ranking models."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class ActivityType(str, Enum):
    """The fixed set of activities the scorer ranks."""

    SKIING = "Skiing"
    SURFING = "Surfing"
    OUTDOOR_SIGHTSEEING = "OutdoorSightseeing"
    INDOOR_SIGHTSEEING = "IndoorSightseeing"


class ActivityRanking(BaseModel):
    """Score for one activity over a forecast period."""

    activity: ActivityType = Field(..., description="Activity being ranked")
    score: int = Field(..., ge=0, le=10, description="Suitability score (0-10)")
    reason: str = Field(..., description="Raw point total and what drove it")
