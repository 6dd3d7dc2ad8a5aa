"""City lookup, forecast normalization and health services."""

from weather_activities.services.cities import CityRegistry, CityResolver
from weather_activities.services.forecast import (
    CityNotFoundError,
    ForecastService,
    MalformedForecastError,
    normalize_daily,
)
from weather_activities.services.health import HealthReport, HealthService
from weather_activities.services.container import ServiceContainer, build_services

__all__ = [
    "CityRegistry",
    "CityResolver",
    "CityNotFoundError",
    "ForecastService",
    "MalformedForecastError",
    "normalize_daily",
    "HealthReport",
    "HealthService",
    "ServiceContainer",
    "build_services",
]
