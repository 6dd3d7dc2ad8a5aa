"""Weather and forecast models.

## Canonical Units
- Temperature: Celsius (°C)
- Precipitation: millimeters (mm), daily sum
- Wind speed: kilometers per hour (km/h), daily maximum at 10 m
- UV index: daily maximum
- Weather code: WMO weather interpretation code as reported by Open-Meteo
"""

from __future__ import annotations

import datetime

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictFloat,
    StrictInt,
    StrictStr,
    model_validator,
)


# WMO weather codes 70-79 report snowfall (inclusive)
SNOW_CODES = (70, 79)


class DailyArrays(BaseModel):
    """Raw ``daily`` block of an Open-Meteo forecast response.

    One list per requested variable, one slot per day. All lists must have
    the same length; a response that breaks this is rejected as a whole.
    """

    model_config = ConfigDict(frozen=True)

    time: list[StrictStr]
    temperature_2m_max: list[StrictFloat]
    temperature_2m_min: list[StrictFloat]
    precipitation_sum: list[StrictFloat]
    weathercode: list[StrictInt]
    windspeed_10m_max: list[StrictFloat]
    uv_index_max: list[StrictFloat]

    @model_validator(mode="after")
    def check_equal_lengths(self) -> "DailyArrays":
        """Ensure every per-day array has one slot per day."""
        lengths = self.lengths()
        if len(set(lengths.values())) > 1:
            raise ValueError(f"daily arrays have mismatched lengths: {lengths}")
        return self

    def lengths(self) -> dict[str, int]:
        """Length of each array, keyed by field name."""
        return {name: len(getattr(self, name)) for name in type(self).model_fields}


class DailyForecast(BaseModel):
    """Weather forecast for a single calendar day."""

    model_config = ConfigDict(frozen=True)

    date: datetime.date = Field(..., description="Calendar date (no time component)")
    temperature_max: float = Field(..., description="Maximum temperature in Celsius")
    temperature_min: float = Field(..., description="Minimum temperature in Celsius")
    precipitation: float = Field(..., ge=0, description="Precipitation sum in mm")
    weather_code: int = Field(..., description="WMO weather code")
    wind_speed: float = Field(..., ge=0, description="Maximum wind speed in km/h")
    uv_index: float = Field(..., ge=0, description="Maximum UV index")

    @model_validator(mode="after")
    def check_temperature_bounds(self) -> "DailyForecast":
        if self.temperature_min > self.temperature_max:
            raise ValueError(
                f"temperature_min {self.temperature_min} exceeds "
                f"temperature_max {self.temperature_max}"
            )
        return self


class WeatherForecast(BaseModel):
    """Daily forecast for a city, ordered by date."""

    model_config = ConfigDict(frozen=True)

    city_id: str = Field(..., description="Id of the city this forecast is for")
    daily: list[DailyForecast] = Field(
        default_factory=list, description="One record per day, ascending by date"
    )
