"""Domain models for weather activity rankings."""

from weather_activities.models.location import City, Coordinates
from weather_activities.models.weather import (
    DailyArrays,
    DailyForecast,
    WeatherForecast,
)
from weather_activities.models.activity import ActivityRanking, ActivityType

__all__ = [
    # Location
    "City",
    "Coordinates",
    # Weather
    "DailyArrays",
    "DailyForecast",
    "WeatherForecast",
    # Activity
    "ActivityRanking",
    "ActivityType",
]
