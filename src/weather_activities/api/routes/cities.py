"""City search routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from weather_activities.api.dependencies import get_services
from weather_activities.models.location import City
from weather_activities.services.container import ServiceContainer

router = APIRouter()


@router.get("", response_model=list[City])
async def suggest_cities(
    query: str = Query(default="", description="City name prefix"),
    services: ServiceContainer = Depends(get_services),
) -> list[City]:
    """Suggest cities matching a name prefix.

    Every returned city is registered so its id can be used for weather and
    activity lookups.
    """
    cities = await services.cities.suggest_cities(query)
    services.registry.register_all(cities)
    return cities
