"""Activity scoring engine.

Every day of the forecast is evaluated against each activity's scoring
rules. Points are summed across all days (no per-day cap) and the total is
rescaled to a 0-10 display score:

    score = round_half_up(raw / 28 * 10), capped at 10

28 is four points a day over seven days. A raw total of zero always maps to
a score of exactly zero.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Protocol, Sequence

from weather_activities.models.activity import ActivityRanking, ActivityType
from weather_activities.models.weather import DailyForecast, WeatherForecast
from weather_activities.rules.conditions import (
    ScoringRule,
    create_indoor_sightseeing_rules,
    create_outdoor_sightseeing_rules,
    create_skiing_rules,
    create_surfing_rules,
)

logger = logging.getLogger(__name__)

MAX_POINTS_PER_DAY = 4
FORECAST_DAYS = 7
MAX_RAW_POINTS = MAX_POINTS_PER_DAY * FORECAST_DAYS
MAX_SCORE = 10


class ForecastProvider(Protocol):
    async def get_weather_forecast(self, city_id: int | str) -> WeatherForecast: ...


@dataclass
class ActivityProfile:
    """Scoring rules and reason phrase for one activity.

    The phrase is fixed per activity and does not depend on which rules
    actually earned points.
    """

    activity: ActivityType
    summary: str
    rules: list[ScoringRule] = field(default_factory=list)

    def points_for_day(self, day: DailyForecast) -> int:
        return sum(r.evaluate(day) for r in self.rules)

    def raw_points(self, days: Sequence[DailyForecast]) -> int:
        return sum(self.points_for_day(day) for day in days)

    def reason(self, raw_points: int) -> str:
        return f"{raw_points} points: {self.summary}"


def default_profiles() -> list[ActivityProfile]:
    """Profiles for the four ranked activities, in output order."""
    return [
        ActivityProfile(
            activity=ActivityType.SKIING,
            summary="Cold temperatures, snow conditions, low wind",
            rules=create_skiing_rules(),
        ),
        ActivityProfile(
            activity=ActivityType.SURFING,
            summary="Warm weather, low rain, moderate wind, safe UV",
            rules=create_surfing_rules(),
        ),
        ActivityProfile(
            activity=ActivityType.OUTDOOR_SIGHTSEEING,
            summary="Mild temperatures, low rain, light breeze, moderate UV",
            rules=create_outdoor_sightseeing_rules(),
        ),
        ActivityProfile(
            activity=ActivityType.INDOOR_SIGHTSEEING,
            summary="Poor outdoor conditions (rain, cold, storms, high wind)",
            rules=create_indoor_sightseeing_rules(),
        ),
    ]


def to_display_score(raw_points: int, max_points: int = MAX_RAW_POINTS) -> int:
    """Rescale raw points to the 0-10 display score.

    Halves round up (7 raw points -> 2.5 -> 3).
    """
    if raw_points <= 0:
        return 0
    scaled = math.floor(raw_points / max_points * MAX_SCORE + 0.5)
    return min(scaled, MAX_SCORE)


class ActivityScorer:
    """Ranks activities from a city's daily forecast.

    Example:
        ```python
        scorer = ActivityScorer(forecast_service)
        rankings = await scorer.rank_activities("2988507")
        best = max(rankings, key=lambda r: r.score)
        ```
    """

    def __init__(
        self,
        forecasts: ForecastProvider | None = None,
        profiles: list[ActivityProfile] | None = None,
    ):
        self.forecasts = forecasts
        self.profiles = profiles if profiles is not None else default_profiles()

    def score_days(self, days: Sequence[DailyForecast]) -> list[ActivityRanking]:
        """Score a sequence of days, one ranking per profile in profile order."""
        rankings = []
        for profile in self.profiles:
            raw = profile.raw_points(days)
            rankings.append(
                ActivityRanking(
                    activity=profile.activity,
                    score=to_display_score(raw),
                    reason=profile.reason(raw),
                )
            )
        return rankings

    def score_forecast(self, forecast: WeatherForecast) -> list[ActivityRanking]:
        """Score every day of a normalized forecast."""
        rankings = self.score_days(forecast.daily)
        logger.debug(
            f"Scored city {forecast.city_id}: "
            + ", ".join(f"{r.activity.value}={r.score}" for r in rankings)
        )
        return rankings

    async def rank_activities(self, city_id: int | str) -> list[ActivityRanking]:
        """Rank the four activities for a registered city.

        Errors from the forecast lookup propagate unchanged.
        """
        if self.forecasts is None:
            raise RuntimeError("ActivityScorer needs a forecast provider to rank by city id")
        forecast = await self.forecasts.get_weather_forecast(city_id)
        return self.score_forecast(forecast)
