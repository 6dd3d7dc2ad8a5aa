"""Service wiring.

One ``ServiceContainer`` is built per process and handed to every request
handler, so caches and the city registry are shared without module-level
globals. Tests build a fresh container each time.
"""

from __future__ import annotations

from dataclasses import dataclass

import httpx

from weather_activities.config import Settings
from weather_activities.providers.openmeteo import OpenMeteoClient
from weather_activities.rules.engine import ActivityScorer
from weather_activities.services.cities import CityRegistry, CityResolver
from weather_activities.services.forecast import ForecastService
from weather_activities.services.health import HealthService


@dataclass
class ServiceContainer:
    """Long-lived services shared by all requests."""

    settings: Settings
    client: OpenMeteoClient
    registry: CityRegistry
    cities: CityResolver
    forecasts: ForecastService
    activities: ActivityScorer
    health: HealthService

    async def aclose(self) -> None:
        """Release network resources."""
        await self.client.aclose()


def build_services(
    settings: Settings,
    transport: httpx.AsyncBaseTransport | None = None,
) -> ServiceContainer:
    """Build the service graph from settings.

    Args:
        settings: Application settings
        transport: Optional httpx transport for the upstream client
    """
    client = OpenMeteoClient(settings, transport=transport)
    registry = CityRegistry(max_entries=settings.city_registry_max_entries)
    forecasts = ForecastService(client, registry)
    return ServiceContainer(
        settings=settings,
        client=client,
        registry=registry,
        cities=CityResolver(client, max_query_length=settings.max_query_length),
        forecasts=forecasts,
        activities=ActivityScorer(forecasts),
        health=HealthService(
            forecasts,
            registry,
            cache=client.cache,
            version=settings.app_version,
        ),
    )
