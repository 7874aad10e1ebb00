"""Application settings using pydantic-settings.

Loads configuration from ``OPR_``-prefixed environment variables with
.env file support.
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Validator configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="OPR_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Environment
    environment: Literal["development", "staging", "production", "testing"] = "development"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # Schemas
    wrapper_schema_id: str = Field(
        default="error.result.schema.json",
        min_length=1,
        description=(
            "Schema id whose errors are only reported when they are the sole "
            "structural error (composition wrapper around response bodies)"
        ),
    )
    load_builtin_schemas: bool = Field(
        default=True,
        description="Register the bundled OPR schema documents and checks at startup",
    )
    extra_schema_dir: Path | None = Field(
        default=None,
        description="Directory of additional YAML schema documents loaded after the built-ins",
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Uses lru_cache to ensure settings are loaded once and reused.
    """
    return Settings()
