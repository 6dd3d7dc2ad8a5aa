"""FastAPI dependencies giving route handlers access to shared services."""

from __future__ import annotations

from fastapi import Request

from weather_activities.services.container import ServiceContainer


def get_services(request: Request) -> ServiceContainer:
    """Services built by the application lifespan."""
    return request.app.state.services
