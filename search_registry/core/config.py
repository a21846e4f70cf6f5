"""Application configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support. The searchable type map itself can come from the
SEARCH_TYPES environment variable (JSON) or be passed in code.
"""

from functools import lru_cache
from typing import Any

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from environment and .env.

    database_url is only required once a session factory is built
    (see infrastructure.persistence.database).
    """

    # App
    app_name: str = "search-registry"
    app_version: str = "1.0.0"
    debug: bool = False
    log_level: str | None = None  # e.g. "WARNING"; overrides debug

    # Database
    database_url: str = ""
    database_echo: bool = False
    # Optional pool overrides (None = use defaults in database.py)
    db_pool_size: int | None = None
    db_max_overflow: int | None = None

    # Search registry
    # Type name -> options ({"fields": [...], "optional_attributes": ..., "private_key": ...})
    search_types: dict[str, dict[str, Any]] = {}
    search_default_private_key: str = "id"
    search_eager_load: list[str] = ["page"]
    search_preserve_hit_order: bool = True

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @model_validator(mode="after")
    def validate_search_defaults(self) -> "Settings":
        """Reject an empty default private key (every type needs a lookup column)."""
        if not self.search_default_private_key.strip():
            raise ValueError(
                "SEARCH_DEFAULT_PRIVATE_KEY must be a non-empty attribute name."
            )
        return self


@lru_cache
def get_settings() -> Settings:
    """Return cached settings (single instance per process).

    In tests, call get_settings.cache_clear() before overriding env vars so
    the next get_settings() uses the new values.

    Returns:
        Loaded and validated Settings instance.
    """
    return Settings()
