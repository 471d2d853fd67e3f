"""Database configuration models."""

from typing import Literal
from urllib.parse import quote

from pydantic import BaseModel, Field, model_validator

BackendType = Literal["postgres", "inmemory"]


class DatabaseConfig(BaseModel):
    """Hydrant store configuration.

    The connection string is either given whole through ``url`` or built
    from the individual parts.
    """

    backend: BackendType = Field(
        default="postgres",
        description="Store backend; 'inmemory' keeps everything in process memory",
    )
    url: str | None = Field(
        default=None,
        description="Full connection URL, overrides host/port/user/password/name",
    )
    host: str = Field(default="localhost", description="Database host")
    port: int = Field(default=5432, ge=1, le=65535, description="Database port")
    user: str = Field(default="hydrant", description="Database user")
    password: str = Field(default="hydrant", description="Database password")
    name: str = Field(default="hydrant_system", description="Database name")
    min_pool_size: int = Field(
        default=1,
        gt=0,
        description="Minimum connections to keep open",
    )
    max_pool_size: int = Field(
        default=10,
        gt=0,
        description="Maximum connections in pool; further requests wait",
    )
    max_inactive_connection_lifetime: float = Field(
        default=300.0,
        gt=0,
        description="Close connections idle longer than this (seconds)",
    )
    command_timeout: float = Field(
        default=60.0,
        gt=0,
        description="Default timeout for queries (seconds)",
    )
    create_schema: bool = Field(
        default=True,
        description="Create missing tables on startup",
    )

    @model_validator(mode="after")
    def check_pool_bounds(self) -> "DatabaseConfig":
        """Reject a pool whose minimum exceeds its maximum."""
        if self.min_pool_size > self.max_pool_size:
            raise ValueError("min_pool_size must not exceed max_pool_size")
        return self

    @property
    def dsn(self) -> str:
        """Connection string for asyncpg."""
        if self.url:
            return self.url
        return (
            f"postgresql://{quote(self.user, safe='')}:{quote(self.password, safe='')}"
            f"@{self.host}:{self.port}/{self.name}"
        )
