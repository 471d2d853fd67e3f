"""Response models for hydrant endpoints.

Request bodies are validated directly into ``HydrantFields``.
"""

from pydantic import BaseModel, Field


class HydrantDeleted(BaseModel):
    """Response for a successful delete."""

    message: str = Field(default="Hydrant deleted")
    id: int
