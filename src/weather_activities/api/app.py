"""FastAPI application factory.

Creates and configures the FastAPI application with all routes and middleware.

## Usage

```python
from weather_activities.api import create_app

app = create_app()

# Run with uvicorn
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
```

## Configuration

The app is configured via environment variables. See `weather_activities.config`
for available settings.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from weather_activities.config import configure_logging, get_settings
from weather_activities.providers.base import SchemaError, UpstreamError
from weather_activities.services.container import ServiceContainer, build_services
from weather_activities.services.forecast import CityNotFoundError, MalformedForecastError
from weather_activities.services.health import HealthReport

logger = logging.getLogger(__name__)


def register_exception_handlers(app: FastAPI) -> None:
    """Translate service errors into JSON error responses."""

    @app.exception_handler(CityNotFoundError)
    async def city_not_found(request: Request, exc: CityNotFoundError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"detail": str(exc), "city_id": exc.city_id},
        )

    @app.exception_handler(SchemaError)
    async def schema_error(request: Request, exc: SchemaError) -> JSONResponse:
        logger.error(f"Upstream schema error: {exc}")
        return JSONResponse(
            status_code=status.HTTP_502_BAD_GATEWAY,
            content={"detail": "Weather provider returned an unexpected response"},
        )

    @app.exception_handler(UpstreamError)
    async def upstream_error(request: Request, exc: UpstreamError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_502_BAD_GATEWAY,
            content={"detail": "Weather provider is unavailable", "provider": exc.provider},
        )

    @app.exception_handler(MalformedForecastError)
    async def malformed_forecast(request: Request, exc: MalformedForecastError) -> JSONResponse:
        logger.error(f"Malformed forecast: {exc}")
        return JSONResponse(
            status_code=status.HTTP_502_BAD_GATEWAY,
            content={"detail": "Forecast data was malformed"},
        )


def create_app(services: ServiceContainer | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        services: Pre-built services (tests); built from settings if omitted

    Returns:
        Configured FastAPI application
    """
    settings = services.settings if services is not None else get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Build services on startup and close them on shutdown."""
        configure_logging(settings.log_level)
        logger.info(f"Starting {settings.app_name} v{settings.app_version}")

        owned = services is None
        app.state.services = services if services is not None else build_services(settings)

        yield

        logger.info("Shutting down")
        if owned:
            await app.state.services.aclose()

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Activity rankings from 7-day weather forecasts",
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        openapi_url="/openapi.json" if settings.debug else None,
        lifespan=lifespan,
    )
    if services is not None:
        app.state.services = services

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # Include routers
    from weather_activities.api.routes import cities, forecasts

    app.include_router(cities.router, prefix="/api/cities", tags=["Cities"])
    app.include_router(forecasts.router, prefix="/api", tags=["Forecasts"])

    @app.get("/health", tags=["Health"], response_model=HealthReport)
    async def health_check(request: Request) -> HealthReport:
        """Probe the forecast path and report latency."""
        return await request.app.state.services.health.check()

    return app
