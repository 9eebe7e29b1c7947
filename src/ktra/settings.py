"""Deployment settings read from ``KTRA_*`` environment variables and ``.env``.

These select what the configuration document cannot: which storage backend
the build runs with, whether crates.io mirroring is on, and where the
document itself lives (``KTRA_CONFIG_FILE``).
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

from ktra.common import AppInfo, Features, LoggingConfig


class Settings(BaseSettings):
    app: AppInfo = AppInfo()
    features: Features = Features()
    logging: LoggingConfig = LoggingConfig()
    config_file: Path = Path("ktra.toml")

    model_config = SettingsConfigDict(
        env_prefix="KTRA_",
        env_nested_delimiter="__",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        nested_model_default_partial_update=True,
        extra="ignore",
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Settings of the running process, read from the environment on first use."""
    return Settings()


settings = get_settings()


__all__ = [
    "Settings",
    "get_settings",
    "settings",
]
