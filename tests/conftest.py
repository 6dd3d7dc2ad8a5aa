"""Pytest fixtures for weather activity ranking tests.

This module provides test fixtures that ensure:
1. No external API calls are made (upstream HTTP is mocked with respx)
2. Fast retries (zero backoff) and plain IPv4/IPv6 transport
3. Fresh caches and registries for every test
"""

from datetime import date, timedelta
from typing import Any

import pytest

from weather_activities.config import Settings
from weather_activities.models.location import City
from weather_activities.models.weather import DailyForecast
from weather_activities.providers.openmeteo import OpenMeteoClient
from weather_activities.services.cities import CityRegistry
from weather_activities.services.container import ServiceContainer, build_services


GEOCODING_BASE = "https://geocoding.test"
FORECAST_BASE = "https://forecast.test"
SEARCH_URL = f"{GEOCODING_BASE}/v1/search"
FORECAST_URL = f"{FORECAST_BASE}/v1/forecast"

START_DATE = date(2025, 8, 14)


# =============================================================================
# Test Isolation Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def reset_settings_cache():
    """Reset settings cache before each test to ensure clean state."""
    from weather_activities.config import get_settings
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def settings() -> Settings:
    """Settings pointing at fake hosts, with instant retries."""
    return Settings(
        open_meteo_base_url=FORECAST_BASE,
        geocoding_base_url=GEOCODING_BASE,
        retry_backoff_seconds=0,
        force_ipv4=False,
        cache_ttl_seconds=300,
    )


@pytest.fixture
def client(settings: Settings) -> OpenMeteoClient:
    return OpenMeteoClient(settings)


@pytest.fixture
def services(settings: Settings) -> ServiceContainer:
    return build_services(settings)


@pytest.fixture
def registry() -> CityRegistry:
    return CityRegistry()


# =============================================================================
# Sample Data
# =============================================================================


@pytest.fixture
def paris() -> City:
    return City(
        id=2988507,
        name="Paris",
        country="France",
        admin1="Île-de-France",
        latitude=48.85341,
        longitude=2.3488,
    )


@pytest.fixture
def london() -> City:
    return City(
        id=2643743,
        name="London",
        country="United Kingdom",
        admin1="England",
        latitude=51.50853,
        longitude=-0.12574,
    )


def geocode_payload(*cities: dict[str, Any]) -> dict[str, Any]:
    """Geocoding response body."""
    return {"results": list(cities), "generationtime_ms": 0.5}


PARIS_RESULT = {
    "id": 2988507,
    "name": "Paris",
    "latitude": 48.85341,
    "longitude": 2.3488,
    "country": "France",
    "admin1": "Île-de-France",
}

PARISH_RESULT = {
    "id": 4303602,
    "name": "Parish",
    "latitude": 43.40423,
    "longitude": -76.12965,
    "country": "United States",
    "admin1": "New York",
}

SPARTA_RESULT = {
    "id": 253394,
    "name": "Sparta",
    "latitude": 37.07446,
    "longitude": 22.43009,
    "country": "Greece",
}


def daily_arrays(
    days: int = 7,
    start: date = START_DATE,
    temperature_max: float = 20.0,
    temperature_min: float = 12.0,
    precipitation: float = 1.0,
    weather_code: int = 3,
    wind_speed: float = 12.0,
    uv_index: float = 5.0,
) -> dict[str, list[Any]]:
    """Raw ``daily`` block with the same values repeated every day."""
    return {
        "time": [(start + timedelta(days=i)).isoformat() for i in range(days)],
        "temperature_2m_max": [temperature_max] * days,
        "temperature_2m_min": [temperature_min] * days,
        "precipitation_sum": [precipitation] * days,
        "weathercode": [weather_code] * days,
        "windspeed_10m_max": [wind_speed] * days,
        "uv_index_max": [uv_index] * days,
    }


def forecast_payload(**kwargs: Any) -> dict[str, Any]:
    """Forecast response body."""
    return {
        "latitude": 48.86,
        "longitude": 2.3399997,
        "timezone": "Europe/Paris",
        "daily": daily_arrays(**kwargs),
    }


def make_days(count: int = 7, **values: Any) -> list[DailyForecast]:
    """``count`` consecutive days sharing the same weather."""
    defaults = {
        "temperature_max": 20.0,
        "temperature_min": 12.0,
        "precipitation": 1.0,
        "weather_code": 3,
        "wind_speed": 12.0,
        "uv_index": 5.0,
    }
    defaults.update(values)
    return [
        DailyForecast(date=START_DATE + timedelta(days=i), **defaults)
        for i in range(count)
    ]
