"""Pydantic schema for the health check."""
from typing import Literal

from pydantic import BaseModel


class HealthResponse(BaseModel):
    """Service status and database connectivity."""

    status: Literal["healthy", "unhealthy"]
    database: Literal["connected", "disconnected"]
