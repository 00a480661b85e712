"""Common schemas used across services."""

from __future__ import annotations

from pydantic import BaseModel


class HealthResponse(BaseModel):
    """Standard health check response."""

    status: str = "ok"


class ServerStatus(BaseModel):
    """Process identity reported at the root URL."""

    name: str
    version: str
    transport: str = "http"
    status: str = "running"
