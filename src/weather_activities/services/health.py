"""Liveness probe.

Exercises the full forecast path against a fixed, well-known city and
reports how long it took. The probe never raises; failures are reported as
an unhealthy check.
"""

from __future__ import annotations

import logging
import time
from datetime import datetime, timezone
from typing import Literal

from pydantic import BaseModel, Field

from weather_activities.cache import TTLCache
from weather_activities.models.location import City
from weather_activities.services.cities import CityRegistry
from weather_activities.services.forecast import ForecastService

logger = logging.getLogger(__name__)

# London, as returned by the Open-Meteo geocoder
DEFAULT_PROBE_CITY = City(
    id=2643743,
    name="London",
    country="United Kingdom",
    admin1="England",
    latitude=51.50853,
    longitude=-0.12574,
)

Status = Literal["healthy", "unhealthy", "degraded"]


class HealthCheck(BaseModel):
    """Status of a single dependency."""

    status: Status
    response_time_ms: float | None = None
    detail: str | None = None


class HealthReport(BaseModel):
    """Overall service health."""

    status: Status
    timestamp: datetime
    uptime_seconds: float = Field(..., ge=0)
    version: str
    checks: dict[str, HealthCheck] = Field(default_factory=dict)


class HealthService:
    """Reports service health by probing the forecast path."""

    def __init__(
        self,
        forecasts: ForecastService,
        registry: CityRegistry,
        cache: TTLCache | None = None,
        version: str = "0.1.0",
        probe_city: City = DEFAULT_PROBE_CITY,
    ):
        self.forecasts = forecasts
        self.registry = registry
        self.cache = cache
        self.version = version
        self.probe_city = probe_city
        self._started = time.monotonic()

    async def check_external_api(self) -> HealthCheck:
        """Fetch the probe city's forecast and time it."""
        if self.probe_city.key not in self.registry:
            self.registry.register(self.probe_city)

        start = time.perf_counter()
        try:
            await self.forecasts.get_weather_forecast(self.probe_city.key)
        except Exception as e:
            logger.warning(f"Health probe failed: {e}")
            return HealthCheck(status="unhealthy", detail=str(e))
        elapsed_ms = (time.perf_counter() - start) * 1000
        return HealthCheck(status="healthy", response_time_ms=round(elapsed_ms, 1))

    def check_cache(self) -> HealthCheck:
        """In-memory caches are always available; report their size."""
        size = len(self.cache) if self.cache is not None else 0
        return HealthCheck(status="healthy", response_time_ms=0, detail=f"{size} entries")

    async def check(self) -> HealthReport:
        """Run every check and aggregate the result."""
        checks = {
            "external_api": await self.check_external_api(),
            "cache": self.check_cache(),
        }
        overall: Status = (
            "healthy" if all(c.status == "healthy" for c in checks.values()) else "degraded"
        )
        return HealthReport(
            status=overall,
            timestamp=datetime.now(timezone.utc),
            uptime_seconds=round(time.monotonic() - self._started, 3),
            version=self.version,
            checks=checks,
        )
