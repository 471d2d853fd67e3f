"""API server configuration models."""

from pydantic import BaseModel, Field, field_validator


class APIConfig(BaseModel):
    """Configuration for the HTTP API server."""

    host: str = Field(default="0.0.0.0", description="Bind address")
    port: int = Field(default=5001, ge=1, le=65535, description="Port number")
    cors_origins: list[str] = Field(
        default=["*"],
        description="Allowed CORS origins",
    )
    cors_allow_credentials: bool = Field(
        default=False,
        description="Allow credentials in CORS",
    )

    @field_validator("cors_origins", mode="before")
    @classmethod
    def parse_cors_origins(cls, v: str | list[str]) -> list[str]:
        """Parse CORS origins from string or list."""
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",")]
        return v
