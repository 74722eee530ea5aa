"""Application settings, loaded from ``STOREFRONT_*`` environment variables."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="STOREFRONT_",
        env_file=".env",
        extra="ignore",
    )

    # Storage
    data_dir: Path = Field(
        Path("data"),
        description="Directory for catalog, ledger and cart files (single writing process)",
    )

    # Ledger
    timezone: str = Field("UTC", description="Zone whose calendar day drives order numbers")
    order_number_attempts: int = Field(25, ge=1, description="Inserts tried per order number race")
    update_attempts: int = Field(5, ge=1, description="Reloads tried on a stale order version")
    default_page_size: int = Field(20, ge=1, description="Admin order list page size")

    # Logging
    log_level: str = Field("INFO", description="Root log level")

    # HTTP
    api_host: str = Field("127.0.0.1", description="Bind address for `storefront serve`")
    api_port: int = Field(8000, description="Port for `storefront serve`")

    @field_validator("log_level")
    @classmethod
    def _upper_log_level(cls, value: str) -> str:
        return value.upper()


@lru_cache
def get_settings() -> Settings:
    """Cached settings so the environment is read once per process."""
    return Settings()
