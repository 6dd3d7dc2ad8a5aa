"""FastAPI application and routes.

This module provides the REST API for the weather activity ranking service.

## API Structure

- /api/cities?query= - City suggestions (registers returned cities)
- /api/weather/{city_id} - 7-day daily forecast
- /api/activities/{city_id} - Activity rankings
- /health - Liveness probe with upstream latency

## Errors

- 404 for city ids never returned by /api/cities
- 502 when the weather provider fails or returns malformed data
"""

from weather_activities.api.app import create_app

__all__ = ["create_app"]
