"""Tests for forecast normalization and the forecast service."""

import asyncio
from datetime import date

import httpx
import pytest
import respx

from conftest import FORECAST_URL, daily_arrays, forecast_payload
from weather_activities.models.location import City
from weather_activities.models.weather import DailyArrays
from weather_activities.providers.base import UpstreamError
from weather_activities.providers.openmeteo import OpenMeteoClient
from weather_activities.services.cities import CityRegistry
from weather_activities.services.forecast import (
    CityNotFoundError,
    ForecastService,
    MalformedForecastError,
    normalize_daily,
)


class TestNormalizeDaily:
    """Tests for normalize_daily."""

    def test_zips_arrays_by_index(self):
        """Test day i takes slot i of every array."""
        data = daily_arrays()
        data["temperature_2m_max"] = [20.0, 21.0, 22.0, 23.0, 24.0, 25.0, 26.0]
        data["weathercode"] = [0, 1, 2, 3, 45, 61, 73]
        data["uv_index_max"] = [1.0, 2.0, 3.0, 4.0, 5.0, 6.0, 7.0]

        days = normalize_daily(DailyArrays.model_validate(data))

        assert len(days) == 7
        assert days[0].date == date(2025, 8, 14)
        assert days[6].date == date(2025, 8, 20)
        assert [d.temperature_max for d in days] == data["temperature_2m_max"]
        assert [d.weather_code for d in days] == data["weathercode"]
        assert days[3].uv_index == 4.0
        assert days[3].precipitation == 1.0

    def test_mismatched_lengths(self):
        """Test unequal arrays fail even when schema checks were bypassed."""
        data = daily_arrays()
        data["precipitation_sum"] = data["precipitation_sum"][:6]
        arrays = DailyArrays.model_construct(**data)

        with pytest.raises(MalformedForecastError, match="mismatched"):
            normalize_daily(arrays)

    def test_wrong_day_count(self):
        """Test exactly seven days are required."""
        arrays = DailyArrays.model_validate(daily_arrays(days=6))
        with pytest.raises(MalformedForecastError, match="Expected 7"):
            normalize_daily(arrays)

    def test_invalid_date(self):
        """Test unparseable dates are rejected."""
        data = daily_arrays()
        data["time"][2] = "not-a-date"
        with pytest.raises(MalformedForecastError, match="day 2"):
            normalize_daily(DailyArrays.model_validate(data))

    def test_non_consecutive_dates(self):
        """Test gaps in the date sequence are rejected."""
        data = daily_arrays()
        data["time"][4] = "2025-08-25"
        data["time"][5] = "2025-08-26"
        data["time"][6] = "2025-08-27"
        with pytest.raises(MalformedForecastError, match="not consecutive"):
            normalize_daily(DailyArrays.model_validate(data))

    def test_min_above_max(self):
        """Test an inverted temperature range is malformed."""
        data = daily_arrays()
        data["temperature_2m_min"][1] = 30.0
        with pytest.raises(MalformedForecastError):
            normalize_daily(DailyArrays.model_validate(data))

    def test_negative_precipitation(self):
        """Test negative precipitation is malformed."""
        data = daily_arrays()
        data["precipitation_sum"][0] = -1.0
        with pytest.raises(MalformedForecastError):
            normalize_daily(DailyArrays.model_validate(data))


class TestForecastService:
    """Tests for ForecastService.get_weather_forecast."""

    def test_unknown_city(self, client: OpenMeteoClient, registry: CityRegistry):
        """Test an unregistered id raises CityNotFoundError."""
        service = ForecastService(client, registry)

        with pytest.raises(CityNotFoundError) as exc_info:
            asyncio.run(service.get_weather_forecast("12345"))

        assert exc_info.value.city_id == "12345"
        assert "City not found: 12345" in str(exc_info.value)

    @respx.mock
    def test_registered_city(self, client: OpenMeteoClient, registry: CityRegistry, paris: City):
        """Test a registered city's coordinates are used."""
        route = respx.get(FORECAST_URL).mock(
            return_value=httpx.Response(200, json=forecast_payload())
        )
        registry.register(paris)
        service = ForecastService(client, registry)

        forecast = asyncio.run(service.get_weather_forecast(2988507))

        assert forecast.city_id == "2988507"
        assert len(forecast.daily) == 7
        params = route.calls.last.request.url.params
        assert params["latitude"] == "48.85341"
        assert params["longitude"] == "2.3488"

    @respx.mock
    def test_upstream_failure_propagates(
        self, client: OpenMeteoClient, registry: CityRegistry, paris: City
    ):
        """Test provider errors reach the caller unchanged."""
        respx.get(FORECAST_URL).mock(return_value=httpx.Response(503))
        registry.register(paris)
        service = ForecastService(client, registry)

        with pytest.raises(UpstreamError):
            asyncio.run(service.get_weather_forecast(paris.key))

    def test_malformed_source_data(self, registry: CityRegistry, paris: City):
        """Test a source returning bad arrays yields MalformedForecastError."""

        class ShortSource:
            async def get_forecast(self, latitude: float, longitude: float) -> DailyArrays:
                return DailyArrays.model_validate(daily_arrays(days=3))

        registry.register(paris)
        service = ForecastService(ShortSource(), registry)

        with pytest.raises(MalformedForecastError):
            asyncio.run(service.get_weather_forecast(paris.key))
