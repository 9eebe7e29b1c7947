"""Public configuration API for ktra.

Load a document once at startup with ``load_config`` (or ``load_config_async``)
and pass the resulting frozen ``Config`` to the rest of the registry.
"""

from __future__ import annotations

from .db import DbBackend, DbConfig, MongoBackend, RedisBackend, SledBackend
from .loader import (
    detect_format,
    dump_config,
    load_config,
    load_config_async,
    parse_config_text,
    save_config,
)
from .models import (
    Config,
    ConfigError,
    ConfigErrorKind,
    ConfigFormat,
    ConfigIOError,
    ConfigNotFoundError,
    ConfigParseError,
    ConfigValidationError,
)
from .sections import CrateFilesConfig, GitConfig, OpenIdConfig, ServerConfig

__all__ = [
    "Config",
    "ConfigError",
    "ConfigErrorKind",
    "ConfigFormat",
    "ConfigIOError",
    "ConfigNotFoundError",
    "ConfigParseError",
    "ConfigValidationError",
    "CrateFilesConfig",
    "DbBackend",
    "DbConfig",
    "GitConfig",
    "MongoBackend",
    "OpenIdConfig",
    "RedisBackend",
    "ServerConfig",
    "SledBackend",
    "detect_format",
    "dump_config",
    "load_config",
    "load_config_async",
    "parse_config_text",
    "save_config",
]
