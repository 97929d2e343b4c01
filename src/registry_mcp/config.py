"""Configuration management for Registry MCP."""

import logging
import os
from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator, ConfigDict
from pydantic_settings import BaseSettings

from .models.base import RegistryKind

logger = logging.getLogger(__name__)

# Registries an operator may pin as the default; "unknown" is not selectable.
SELECTABLE_REGISTRIES = (RegistryKind.NPM, RegistryKind.JSR, RegistryKind.DENO)


class Settings(BaseSettings):
    """Application settings."""

    model_config = ConfigDict(
        env_file=".env" if os.getenv("ENVIRONMENT") != "test" else None,
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Application
    app_name: str = "Registry MCP"
    app_version: str = "0.1.0"
    debug: bool = Field(default=False)
    environment: str = Field(default="development")
    log_level: str = Field(default="INFO")

    # Registry selection
    default_registry: Optional[RegistryKind] = Field(
        default=None,
        description="Registry used when a call names none; overrides auto-detection",
    )

    # Outbound HTTP
    http_timeout: float = Field(default=30.0, gt=0)
    bundle_size_timeout: float = Field(default=15.0, gt=0)
    user_agent: Optional[str] = Field(default=None)

    @field_validator("default_registry", mode="before")
    @classmethod
    def validate_default_registry(cls, v):
        kind = RegistryKind.parse(v)
        if kind is None or kind not in SELECTABLE_REGISTRIES:
            if v not in (None, ""):
                logger.warning(f"Ignoring invalid DEFAULT_REGISTRY value: {v!r}")
            return None
        return kind

    def get_user_agent(self) -> str:
        """User agent sent with every upstream request."""
        return self.user_agent or f"registry-mcp/{self.app_version}"

    def get_log_level(self) -> str:
        return "DEBUG" if self.debug else self.log_level.upper()


@lru_cache()
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()
