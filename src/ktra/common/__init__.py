"""Common models and types used across ktra modules."""

from .fields import ConnectionUrl, FrozenStrings, Octet, Port, RemoteUrl
from .logging import LoggingConfig, create_logger, disable_library_logging, enable_library_logging, setup_logging
from .models import AppInfo, DbBackendKind, Features

__all__ = [
    "AppInfo",
    "ConnectionUrl",
    "DbBackendKind",
    "Features",
    "FrozenStrings",
    "LoggingConfig",
    "Octet",
    "Port",
    "RemoteUrl",
    "create_logger",
    "disable_library_logging",
    "enable_library_logging",
    "setup_logging",
]
