"""Configuration file loading, validation and serialisation."""

from __future__ import annotations

import asyncio
import tomllib
from pathlib import Path

import yaml
from pydantic import ValidationError
from result import Err, Ok, Result, is_err

from ktra.common import DbBackendKind, create_logger
from ktra.settings import settings

from .db import DB_BACKEND_CONTEXT_KEY
from .models import (
    Config,
    ConfigError,
    ConfigFormat,
    ConfigIOError,
    ConfigNotFoundError,
    ConfigParseError,
    ConfigValidationError,
)
from .resolver import RawDocument, apply_env_overrides

logger = create_logger("config")

_YAML_SUFFIXES = frozenset({".yaml", ".yml"})


def detect_format(path: Path) -> ConfigFormat:
    """TOML unless the file carries a YAML suffix."""
    return ConfigFormat.YAML if path.suffix.lower() in _YAML_SUFFIXES else ConfigFormat.TOML


def load_config(
    path: Path | None = None,
    *,
    db_backend: DbBackendKind | None = None,
) -> Result[Config, ConfigError]:
    """Read and validate the configuration document at ``path``.

    Defaults to ``settings.config_file``. The backend used when the document's
    ``db_config`` names none comes from ``db_backend`` or the deployment settings.
    """
    path = path if path is not None else settings.config_file
    read_result = _read_document(path)
    if is_err(read_result):
        return read_result

    return parse_config_text(read_result.ok_value, detect_format(path), path=path, db_backend=db_backend)


async def load_config_async(
    path: Path | None = None,
    *,
    db_backend: DbBackendKind | None = None,
) -> Result[Config, ConfigError]:
    """Async variant of ``load_config``; the file read runs in a worker thread."""
    path = path if path is not None else settings.config_file
    read_result = await asyncio.to_thread(_read_document, path)
    if is_err(read_result):
        return read_result

    return parse_config_text(read_result.ok_value, detect_format(path), path=path, db_backend=db_backend)


def parse_config_text(
    text: str,
    fmt: ConfigFormat = ConfigFormat.TOML,
    *,
    path: Path | None = None,
    db_backend: DbBackendKind | None = None,
) -> Result[Config, ConfigError]:
    """Parse an in-memory document, apply environment overrides and validate it."""
    parse_result = _parse_document(text, fmt, path)
    if is_err(parse_result):
        return parse_result

    data = apply_env_overrides(parse_result.ok_value)
    backend = db_backend or settings.features.db_backend

    return _validate(data, path, backend).inspect(
        lambda config: logger.debug(
            "Config loaded",
            path=str(path) if path else None,
            root_dir_path=str(config.root_dir_path),
            db_backend=config.db_config.kind,
        )
    )


def dump_config(config: Config) -> str:
    """Serialise ``config`` to a YAML document that reloads to an equal value."""
    return yaml.safe_dump(config.model_dump(mode="json"), sort_keys=False)


def save_config(config: Config, path: Path) -> Result[None, ConfigError]:
    """Write ``config`` as YAML to ``path``, creating the parent directory."""
    if detect_format(path) is not ConfigFormat.YAML:
        raise ValueError(f"Configuration can only be written as YAML, got '{path.name}'")

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(dump_config(config), encoding="utf-8")
    except OSError as exc:
        logger.error("Config write error", path=str(path), error=str(exc))
        return Err(ConfigIOError(path=path, message=str(exc)))

    logger.debug("Config written", path=str(path))
    return Ok(None)


def _read_document(path: Path) -> Result[str, ConfigError]:
    logger.debug("Loading config file", path=str(path))

    if not path.exists() or not path.is_file():
        logger.warning("Config file not found", path=str(path))
        return Err(
            ConfigNotFoundError(
                expected_path=path,
                message="Configuration file not found.",
            ),
        )

    try:
        return Ok(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError) as exc:
        logger.error("Config file read error", path=str(path), error=str(exc))
        return Err(ConfigIOError(path=path, message=str(exc)))


def _parse_document(text: str, fmt: ConfigFormat, path: Path | None) -> Result[RawDocument, ConfigError]:
    match fmt:
        case ConfigFormat.TOML:
            try:
                data = tomllib.loads(text)
            except tomllib.TOMLDecodeError as exc:
                return Err(_parse_error(fmt, path, str(exc), getattr(exc, "lineno", None), getattr(exc, "colno", None)))
        case ConfigFormat.YAML:
            try:
                data = yaml.safe_load(text)
            except yaml.YAMLError as exc:
                mark = getattr(exc, "problem_mark", None)
                line = getattr(mark, "line", None)
                column = getattr(mark, "column", None)
                return Err(
                    _parse_error(
                        fmt,
                        path,
                        str(exc),
                        (line + 1) if line is not None else None,
                        (column + 1) if column is not None else None,
                    )
                )
        case _:
            raise ValueError(f"Unexpected format: {fmt}")

    if data is None:
        data = {}

    if not isinstance(data, dict):
        logger.error("Config must be a mapping", path=str(path) if path else None)
        return Err(
            ConfigValidationError(
                path=path,
                field=None,
                message="Configuration root must be a mapping of keys to values.",
            ),
        )

    return Ok(data)


def _parse_error(
    fmt: ConfigFormat,
    path: Path | None,
    message: str,
    line: int | None,
    column: int | None,
) -> ConfigParseError:
    logger.error(
        "Config parse error",
        format=fmt.value,
        path=str(path) if path else None,
        line=line,
        column=column,
        error=message,
    )
    return ConfigParseError(path=path, format=fmt, line=line, column=column, message=message)


def _validate(data: RawDocument, path: Path | None, db_backend: DbBackendKind) -> Result[Config, ConfigError]:
    try:
        return Ok(Config.model_validate(data, context={DB_BACKEND_CONTEXT_KEY: db_backend}))
    except ValidationError as exc:
        problems = [(_dotted(detail.get("loc") or ()), detail.get("msg", "")) for detail in exc.errors()]
        if not problems:
            problems = [(None, str(exc))]
        field = problems[0][0]
        message = "; ".join(f"{loc}: {msg}" if loc else msg for loc, msg in problems)
        logger.error("Config validation error", path=str(path) if path else None, field=field, error=message)
        return Err(
            ConfigValidationError(
                path=path,
                field=field,
                message=message,
            ),
        )


def _dotted(loc: tuple[int | str, ...]) -> str | None:
    return ".".join(str(part) for part in loc) or None
