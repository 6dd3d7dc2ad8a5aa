"""Forecast normalization.

Translates the provider's parallel per-field arrays into one
``DailyForecast`` per day for a registered city.
"""

from __future__ import annotations

import datetime
import logging
from typing import Protocol

from pydantic import ValidationError

from weather_activities.models.weather import DailyArrays, DailyForecast, WeatherForecast
from weather_activities.services.cities import CityRegistry

logger = logging.getLogger(__name__)

FORECAST_DAYS = 7


class CityNotFoundError(LookupError):
    """Raised when a forecast is requested for an id that was never registered."""

    def __init__(self, city_id: int | str):
        super().__init__(f"City not found: {city_id}")
        self.city_id = str(city_id)


class MalformedForecastError(ValueError):
    """Raised when raw forecast arrays cannot be turned into daily records."""


class ForecastSource(Protocol):
    async def get_forecast(self, latitude: float, longitude: float) -> DailyArrays: ...


def normalize_daily(arrays: DailyArrays, days: int = FORECAST_DAYS) -> list[DailyForecast]:
    """Zip raw daily arrays into ordered DailyForecast records.

    Args:
        arrays: Raw per-field arrays from the provider
        days: Exact number of days expected

    Returns:
        One record per day, ascending by date

    Raises:
        MalformedForecastError: If lengths disagree, the day count is wrong,
            dates are not consecutive, or a day's values are invalid
    """
    lengths = arrays.lengths()
    if len(set(lengths.values())) != 1:
        raise MalformedForecastError(f"Daily arrays have mismatched lengths: {lengths}")
    if len(arrays.time) != days:
        raise MalformedForecastError(
            f"Expected {days} forecast days, got {len(arrays.time)}"
        )

    daily: list[DailyForecast] = []
    for i, date_str in enumerate(arrays.time):
        try:
            daily.append(
                DailyForecast(
                    date=datetime.date.fromisoformat(date_str),
                    temperature_max=arrays.temperature_2m_max[i],
                    temperature_min=arrays.temperature_2m_min[i],
                    precipitation=arrays.precipitation_sum[i],
                    weather_code=arrays.weathercode[i],
                    wind_speed=arrays.windspeed_10m_max[i],
                    uv_index=arrays.uv_index_max[i],
                )
            )
        except (ValidationError, ValueError) as e:
            raise MalformedForecastError(f"Invalid forecast for day {i} ({date_str}): {e}") from e

    for previous, current in zip(daily, daily[1:]):
        if current.date - previous.date != datetime.timedelta(days=1):
            raise MalformedForecastError(
                f"Forecast dates are not consecutive: {previous.date} -> {current.date}"
            )

    return daily


class ForecastService:
    """Builds per-day forecasts for registered cities."""

    def __init__(self, source: ForecastSource, registry: CityRegistry):
        self.source = source
        self.registry = registry

    async def get_weather_forecast(self, city_id: int | str) -> WeatherForecast:
        """Get the 7-day forecast for a registered city.

        Raises:
            CityNotFoundError: If ``city_id`` was never registered
            MalformedForecastError: If the raw arrays cannot be normalized
            UpstreamError: If the provider request fails
        """
        city = self.registry.get(city_id)
        if city is None:
            raise CityNotFoundError(city_id)

        arrays = await self.source.get_forecast(city.latitude, city.longitude)
        return WeatherForecast(city_id=city.key, daily=normalize_daily(arrays))
