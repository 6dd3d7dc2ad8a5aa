"""Weather forecast and activity ranking routes.

Both routes take a city id previously returned by `/api/cities`; unknown
ids yield 404.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from weather_activities.api.dependencies import get_services
from weather_activities.models.activity import ActivityRanking
from weather_activities.models.weather import WeatherForecast
from weather_activities.services.container import ServiceContainer

router = APIRouter()


@router.get("/weather/{city_id}", response_model=WeatherForecast)
async def get_weather(
    city_id: str,
    services: ServiceContainer = Depends(get_services),
) -> WeatherForecast:
    """Get the 7-day daily forecast for a city."""
    return await services.forecasts.get_weather_forecast(city_id)


@router.get("/activities/{city_id}", response_model=list[ActivityRanking])
async def get_activities(
    city_id: str,
    services: ServiceContainer = Depends(get_services),
) -> list[ActivityRanking]:
    """Rank Skiing, Surfing, OutdoorSightseeing and IndoorSightseeing for a city.

    Rankings are returned in that fixed order; clients sort by score.
    """
    return await services.activities.rank_activities(city_id)
