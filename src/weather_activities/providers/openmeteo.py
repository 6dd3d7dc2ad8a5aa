"""Open-Meteo geocoding and forecast client.

## API Documentation Summary
Source: https://open-meteo.com/en/docs
Source: https://open-meteo.com/en/docs/geocoding-api

## Endpoints
- Geocoding: https://geocoding-api.open-meteo.com/v1/search
- Forecast: https://api.open-meteo.com/v1/forecast

## Authentication
- None required for non-commercial use

## Geocoding Request
`GET /v1/search?name=<query>&count=10&language=en&format=json`

```json
{
  "results": [
    {
      "id": 2988507,
      "name": "Paris",
      "latitude": 48.85341,
      "longitude": 2.3488,
      "country": "France",
      "admin1": "Île-de-France"
    }
  ]
}
```

## Forecast Request
`GET /v1/forecast?latitude=<lat>&longitude=<lon>&daily=<fields>&forecast_days=7&timezone=auto`

```json
{
  "daily": {
    "time": ["2024-06-15", "..."],
    "temperature_2m_max": [22.1, "..."],
    "temperature_2m_min": [13.4, "..."],
    "precipitation_sum": [0.0, "..."],
    "weathercode": [3, "..."],
    "windspeed_10m_max": [14.2, "..."],
    "uv_index_max": [6.1, "..."]
  }
}
```

## Variable Translation (Open-Meteo -> Canonical)
| Open-Meteo Field | Canonical Field | Unit |
|------------------|-----------------|------|
| time | date | ISO date |
| temperature_2m_max | temperature_max | °C |
| temperature_2m_min | temperature_min | °C |
| precipitation_sum | precipitation | mm |
| weathercode | weather_code | WMO code |
| windspeed_10m_max | wind_speed | km/h |
| uv_index_max | uv_index | index |
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import BaseModel, ValidationError

from weather_activities.models.location import City, Coordinates
from weather_activities.models.weather import DailyArrays
from weather_activities.providers.base import HttpProvider, SchemaError

logger = logging.getLogger(__name__)

FORECAST_DAYS = 7
GEOCODE_RESULT_COUNT = 10

DAILY_FIELDS = (
    "temperature_2m_max",
    "temperature_2m_min",
    "precipitation_sum",
    "weathercode",
    "windspeed_10m_max",
    "uv_index_max",
)


class GeocodeResponse(BaseModel):
    """Schema for a geocoding search response."""

    results: list[City]


class ForecastResponse(BaseModel):
    """Schema for a daily forecast response."""

    daily: DailyArrays


def _describe_payload(data: Any, limit: int = 500) -> str:
    text = repr(data)
    return text if len(text) <= limit else text[:limit] + "..."


class OpenMeteoClient(HttpProvider):
    """Open-Meteo geocoding and forecast client.

    Example:
        ```python
        async with OpenMeteoClient(get_settings()) as client:
            cities = await client.geocode("Paris")
            daily = await client.get_forecast(cities[0].latitude, cities[0].longitude)
        ```
    """

    name = "open-meteo"

    @property
    def geocoding_url(self) -> str:
        return f"{self.settings.geocoding_base_url}/v1/search"

    @property
    def forecast_url(self) -> str:
        return f"{self.settings.open_meteo_base_url}/v1/forecast"

    async def geocode(self, query: str) -> list[City]:
        """Search cities by name.

        The query is sent verbatim as the search term.

        Raises:
            UpstreamError: If the request fails after retries
            SchemaError: If the response does not match the geocoding schema
        """

        async def load() -> list[City]:
            data = await self._get_json(
                self.geocoding_url,
                params={
                    "name": query,
                    "count": GEOCODE_RESULT_COUNT,
                    "language": "en",
                    "format": "json",
                },
            )
            return self._validate(GeocodeResponse, data).results

        return await self._cached(f"geocode:{query}", load)

    async def get_forecast(self, latitude: float, longitude: float) -> DailyArrays:
        """Get the raw 7-day daily forecast arrays for a location.

        Raises:
            UpstreamError: If the request fails after retries
            SchemaError: If the response does not match the forecast schema
        """
        coordinates = Coordinates(latitude=latitude, longitude=longitude)

        async def load() -> DailyArrays:
            data = await self._get_json(
                self.forecast_url,
                params={
                    "latitude": latitude,
                    "longitude": longitude,
                    "daily": ",".join(DAILY_FIELDS),
                    "forecast_days": FORECAST_DAYS,
                    "timezone": "auto",
                },
            )
            return self._validate(ForecastResponse, data).daily

        return await self._cached(f"weather:{coordinates.cache_key()}", load)

    def _validate(self, schema: type[BaseModel], data: Any) -> Any:
        """Validate ``data`` against ``schema`` or raise SchemaError."""
        try:
            return schema.model_validate(data)
        except ValidationError as e:
            logger.warning(
                f"{self.name}: rejected {schema.__name__}: "
                f"{e.error_count()} validation errors"
            )
            raise SchemaError(
                f"Invalid {self.name} response for {schema.__name__}: {e}",
                provider=self.name,
                payload=_describe_payload(data),
            ) from e
