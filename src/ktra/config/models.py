"""Pydantic models for the ktra configuration document and its load errors."""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Any, TypeAlias

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .db import DbConfig, SledBackend
from .defaults import root_dir_path_default
from .sections import CrateFilesConfig, GitConfig, OpenIdConfig, ServerConfig


class ConfigErrorKind(str, Enum):
    """Coarse error categories surfaced to the process entry point."""

    IO = "io"
    SCHEMA = "schema"


class ConfigFormat(str, Enum):
    TOML = "toml"
    YAML = "yaml"


class ConfigNotFoundError(BaseModel):
    """Configuration file not found at expected location."""

    model_config = ConfigDict(extra="forbid")

    expected_path: Path
    message: str

    @property
    def kind(self) -> ConfigErrorKind:
        return ConfigErrorKind.IO


class ConfigIOError(BaseModel):
    """File I/O error reading or writing configuration."""

    model_config = ConfigDict(extra="forbid")

    path: Path
    message: str

    @property
    def kind(self) -> ConfigErrorKind:
        return ConfigErrorKind.IO


class ConfigParseError(BaseModel):
    """Syntax error in the TOML or YAML document."""

    model_config = ConfigDict(extra="forbid")

    path: Path | None = None
    format: ConfigFormat
    line: int | None = None
    column: int | None = None
    message: str

    @property
    def kind(self) -> ConfigErrorKind:
        return ConfigErrorKind.SCHEMA


class ConfigValidationError(BaseModel):
    """Schema validation error in configuration."""

    model_config = ConfigDict(extra="forbid")

    path: Path | None = None
    field: str | None = None
    message: str

    @property
    def kind(self) -> ConfigErrorKind:
        return ConfigErrorKind.SCHEMA


ConfigError: TypeAlias = ConfigNotFoundError | ConfigIOError | ConfigParseError | ConfigValidationError


class Config(BaseModel):
    """Fully resolved registry configuration.

    ``root_dir_path`` is the only absolute anchor; every on-disk location is
    derived from it. Instances are frozen, so the ``openid_config`` value can
    be handed to any number of concurrent request handlers as is.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    root_dir_path: Path = Field(default_factory=root_dir_path_default)
    crate_files_config: CrateFilesConfig = Field(default_factory=CrateFilesConfig)
    db_config: DbConfig = Field(default_factory=DbConfig)
    git_config: GitConfig = Field(default_factory=GitConfig.unconfigured)
    server_config: ServerConfig = Field(default_factory=ServerConfig)
    openid_config: OpenIdConfig = Field(default_factory=OpenIdConfig.unconfigured)

    @model_validator(mode="before")
    @classmethod
    def _materialize_db_section(cls, data: Any) -> Any:
        # An absent section must still go through backend selection with the loader's context
        if isinstance(data, dict) and "db_config" not in data:
            return {**data, "db_config": {}}
        return data

    def index_path(self) -> Path:
        return self.root_dir_path / GitConfig.index_path_relative()

    def dl_dir_path(self) -> Path:
        return self.root_dir_path / CrateFilesConfig.dl_dir_path_relative()

    def cache_dir_path(self) -> Path:
        """Cache for crates fetched from crates.io; used only when mirroring is enabled."""
        return self.root_dir_path / CrateFilesConfig.cache_dir_path_relative()

    def db_dir_path(self) -> Path:
        """Directory of the embedded store; used only by the sled backend."""
        return self.root_dir_path / SledBackend.db_dir_path_relative()
