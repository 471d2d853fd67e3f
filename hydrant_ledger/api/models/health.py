"""Health check response models."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field


class ComponentHealth(BaseModel):
    """Health status of a single component."""

    name: str
    status: Literal["healthy", "unhealthy"]
    latency_ms: float | None = None
    message: str | None = None


class HealthResponse(BaseModel):
    """Overall service health."""

    status: Literal["healthy", "unhealthy"]
    version: str
    components: list[ComponentHealth] = Field(default_factory=list)
    timestamp: datetime
