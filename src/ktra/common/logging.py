"""Logging utilities for ktra using Loguru.

This module provides logging configuration for both server and library usage:
- Server usage: stderr logging, colorized text in dev and JSON in prod
- Library usage: Logging disabled by default, can be enabled by library users
"""

import sys
from functools import lru_cache
from typing import Literal

import loguru
from loguru import logger
from pydantic import BaseModel, ConfigDict, Field

from ktra.constants import APP_NAME

from .models import AppInfo


class LoggingConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    enabled: bool = Field(default=True)
    log_level: Literal["TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"] = Field(default="INFO")
    format: Literal["json", "text"] = Field(default="text")


def setup_logging(app_info: AppInfo, config: LoggingConfig) -> list[int]:
    """Configure Loguru for the registry server process.

    Returns the ids of the installed handlers so callers can remove them.
    """
    logger.enable(APP_NAME)
    logger.remove()
    logger.configure(extra={"scope": "global", "env": app_info.environment})

    if not config.enabled:
        return []

    if config.format == "text":
        handler_ids = [
            logger.add(sys.stderr, level=config.log_level, format=_get_dev_format, colorize=True),
        ]
    else:
        handler_ids = [
            logger.add(sys.stdout, level=config.log_level, serialize=True, format="{message}"),
            # Errors are duplicated to stderr for log shippers that only watch it
            logger.add(sys.stderr, level="ERROR", serialize=True, format="{message}", diagnose=False),
        ]

    logger.info(f"Logging initialized: {app_info.project_name} v{app_info.version} ({app_info.environment})")

    return handler_ids


def disable_library_logging() -> None:
    logger.disable(APP_NAME)


def enable_library_logging(level: str = "INFO") -> int:
    logger.enable(APP_NAME)
    logger.remove()

    handler_id = logger.add(
        sys.stderr,
        level=level,
        format=_get_text_format(),
        colorize=False,
    )

    return handler_id


def create_logger(scope: str) -> "loguru.Logger":
    return logger.bind(scope=scope)


@lru_cache
def get_color_from_name(name: str | None) -> str:
    """Map a scope name to a predefined color in a deterministic way."""
    colors = [
        "blue",
        "magenta",
        "yellow",
        "white",
        "light-blue",
        "light-green",
        "light-magenta",
        "light-yellow",
    ]

    if not name:
        return colors[0]

    return colors[sum(ord(c) for c in name) % len(colors)]


def _get_dev_format(record: "loguru.Record") -> str:
    scope = record["extra"].get("scope", None)
    color_name = get_color_from_name(scope)

    extra_fields = {k: v for k, v in record["extra"].items() if k not in ["scope", "env"]}
    extra_str = ""
    if extra_fields:
        extra_str = " | " + " ".join(f"{k}={v}" for k, v in extra_fields.items())

    return (
        f"<{color_name}>[{{extra[scope]}}]</> | "
        "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
        "<level>{level: <8}</level> | "
        "<cyan>{name}:{function}:{line}</cyan> - "
        "<level>{message}</level>"
        f"{extra_str}\n{{exception}}"
    )


def _get_text_format() -> str:
    return "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message} | {extra}\n{exception}"
