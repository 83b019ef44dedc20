"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, satorder.toml only contains overrides.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, model_validator

from satorder.domain.pagination import DEFAULT_LIMIT, MAX_LIMIT


class DatabaseConfig(BaseModel):
    """[database] section."""

    model_config = {"frozen": True}

    # Relative paths resolve against the project root.
    path: str = ".satorder/satorder.db"
    busy_timeout: float = Field(default=5.0, gt=0)


class PaginationConfig(BaseModel):
    """[pagination] section: one default and one maximum page size for every listing."""

    model_config = {"frozen": True}

    default_limit: int = Field(default=DEFAULT_LIMIT, ge=1)
    max_limit: int = Field(default=MAX_LIMIT, ge=1)

    @model_validator(mode="after")
    def _default_within_max(self) -> PaginationConfig:
        if self.default_limit > self.max_limit:
            msg = f"default_limit ({self.default_limit}) exceeds max_limit ({self.max_limit})"
            raise ValueError(msg)
        return self


class ApiConfig(BaseModel):
    """[api] section."""

    model_config = {"frozen": True}

    host: str = "127.0.0.1"
    port: int = 3000
    prefix: str = "/api"
    cors_origins: list[str] = Field(default_factory=list)

