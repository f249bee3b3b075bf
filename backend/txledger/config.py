"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - get_settings() is cached (lru_cache) — single instance per process
    - recency_window_ms must be positive

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - TXLEDGER_ prefix keeps ledger settings apart from the host environment
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache

from txledger.core.domain_types import RECENCY_WINDOW_MS


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env", env_prefix="TXLEDGER_", case_sensitive=False,
    )

    # Ledger
    recency_window_ms: int = RECENCY_WINDOW_MS

    @field_validator("recency_window_ms")
    @classmethod
    def window_must_be_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("recency_window_ms must be positive")
        return v

    # API
    cors_origins: list[str] = ["http://localhost:3000"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
