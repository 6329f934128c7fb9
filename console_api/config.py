"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - get_settings() is cached (lru_cache) — single instance per process
    - Settings are read-only after startup (shared by all request workers)

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support (ADR: developer UX)
    - Defaults provided for all settings: works out-of-the-box in development
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache
import codecs

from console_api.core.domain_types import Locale


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Service endpoints
    disabled_services: list[str] = []

    # Charset of JSON request bodies
    mapping_charset: str = "utf-8"

    @field_validator("mapping_charset")
    @classmethod
    def check_charset(cls, v: str) -> str:
        """Fail at startup, not on the first request body."""
        try:
            codecs.lookup(v)
        except LookupError:
            raise ValueError(f"unknown charset: {v}")
        return v

    # Value encoder safety rail for lazy sequences
    encoder_max_iterator_items: int = 100_000

    # Locale used when Accept-Language names none of the catalogs
    default_locale: Locale = Locale.EN

    # API
    cors_origins: list[str] = ["http://localhost:4502"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
