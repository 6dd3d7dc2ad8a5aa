"""City search and the id -> city registry.

## Usage

```python
resolver = CityResolver(client)
cities = await resolver.suggest_cities("Par")

# The caller registers results so forecasts can later be requested by id
registry.register_all(cities)
```
"""

from __future__ import annotations

import logging
from typing import Iterable, Protocol

from weather_activities.cache import TTLCache
from weather_activities.models.location import City

logger = logging.getLogger(__name__)

MAX_QUERY_LENGTH = 50


class Geocoder(Protocol):
    async def geocode(self, query: str) -> list[City]: ...


class CityRegistry:
    """Process-wide lookup table from city id to City.

    Forecast requests arrive with a city id only, so every city handed out
    by a search must be registered here first. Ids are compared as strings.
    The table is bounded; the least recently used city is dropped when full.
    """

    def __init__(self, max_entries: int = 10_000):
        self._cities: TTLCache[City] = TTLCache(ttl_seconds=None, max_entries=max_entries)

    def register(self, city: City) -> None:
        """Add or replace a city."""
        self._cities.set(city.key, city)

    def register_all(self, cities: Iterable[City]) -> None:
        """Register every city in ``cities``."""
        for city in cities:
            self.register(city)

    def get(self, city_id: int | str) -> City | None:
        """Get a registered city, or None if the id was never registered."""
        return self._cities.get(str(city_id))

    def __contains__(self, city_id: int | str) -> bool:
        return str(city_id) in self._cities

    def __len__(self) -> int:
        return len(self._cities)


class CityResolver:
    """Turns free-text queries into city candidates."""

    def __init__(self, geocoder: Geocoder, max_query_length: int = MAX_QUERY_LENGTH):
        self.geocoder = geocoder
        self.max_query_length = max_query_length

    async def suggest_cities(self, query: str) -> list[City]:
        """Suggest cities whose name starts with ``query``.

        Empty or over-long queries return an empty list without contacting
        the provider. The provider already matches prefixes; results are
        filtered again in case it matches more loosely.

        Raises:
            UpstreamError: If geocoding fails
            SchemaError: If the geocoding response is malformed
        """
        clean = query.strip()
        if not clean or len(clean) > self.max_query_length:
            logger.debug(f"Ignoring city query of length {len(clean)}")
            return []

        results = await self.geocoder.geocode(clean)
        prefix = clean.lower()
        return [city for city in results if city.name.lower().startswith(prefix)]
