"""Upstream weather data providers."""

from weather_activities.providers.base import HttpProvider, SchemaError, UpstreamError
from weather_activities.providers.openmeteo import OpenMeteoClient

__all__ = [
    "HttpProvider",
    "SchemaError",
    "UpstreamError",
    "OpenMeteoClient",
]
