"""Location models: coordinates and geocoded cities."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, StrictFloat, StrictInt, StrictStr


class Coordinates(BaseModel):
    """WGS84 point used to key cached forecasts.

    Latitude runs -90 (south) to +90 (north), longitude -180 (west) to +180
    (east).
    """

    model_config = ConfigDict(frozen=True)

    latitude: float = Field(..., ge=-90, le=90, description="Latitude in decimal degrees")
    longitude: float = Field(..., ge=-180, le=180, description="Longitude in decimal degrees")

    def cache_key(self, precision: int = 4) -> str:
        """Fixed-precision 'lat,lon' string, stable across float noise."""
        return f"{self.latitude:.{precision}f},{self.longitude:.{precision}f}"


class City(BaseModel):
    """A city returned by the geocoding provider.

    Cities are created from a geocoding response and never mutated. The id is
    assigned by the provider and is the handle clients use for forecast and
    activity lookups.
    """

    model_config = ConfigDict(frozen=True)

    id: StrictInt | StrictStr = Field(..., description="Provider-assigned city id")
    name: StrictStr = Field(..., description="City name")
    country: StrictStr = Field(..., description="Country name")
    admin1: StrictStr | None = Field(
        default=None, description="First-level administrative region (state/province)"
    )
    latitude: StrictFloat = Field(..., ge=-90, le=90, description="Latitude in decimal degrees")
    longitude: StrictFloat = Field(..., ge=-180, le=180, description="Longitude in decimal degrees")

    @property
    def key(self) -> str:
        """Registry key for this city (ids are compared as strings)."""
        return str(self.id)

    def display_name(self) -> str:
        """Get a display name such as 'Paris, Île-de-France, France'."""
        parts = [self.name, self.admin1, self.country]
        return ", ".join(p for p in parts if p)
