"""Environment variable overrides for the raw configuration document.

``KTRA_CONFIG__SERVER_CONFIG__PORT=9000`` sets ``server_config.port``. The value
is interpreted against the schema: fields holding text or paths take the raw
string, string lists are read as YAML flow sequences of strings, and every other
field takes the YAML scalar the string parses to.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path
from types import UnionType
from typing import Annotated, TypeAlias, Union, get_args, get_origin

import yaml
from pydantic import BaseModel

from ktra.common import create_logger
from ktra.constants import ENV_PREFIX
from ktra.utils import deep_merge

from .models import Config

logger = create_logger("config")

RawDocument: TypeAlias = dict[str, object]

_TEXT_TYPES = (str, Path)


def apply_env_overrides(data: RawDocument, environ: Mapping[str, str] | None = None) -> RawDocument:
    """Merge ``KTRA_CONFIG__SECTION__KEY`` variables over a parsed document.

    Runs before validation, so overridden values go through the same schema
    checks as values read from the file.
    """
    environ = os.environ if environ is None else environ
    overrides: RawDocument = {}

    for variable, raw in environ.items():
        if not variable.startswith(ENV_PREFIX):
            continue
        path = [segment.lower() for segment in variable.removeprefix(ENV_PREFIX).split("__") if segment]
        if not path:
            continue
        overrides = deep_merge(overrides, _nest(path, _override_value(path, raw)))
        logger.debug("Config override from environment", variable=variable, field=".".join(path))

    return deep_merge(data, overrides) if overrides else data


def _nest(path: list[str], value: object) -> RawDocument:
    nested: object = value
    for segment in reversed(path):
        nested = {segment: nested}
    return nested  # type: ignore[return-value]


def _override_value(path: list[str], raw: str) -> object:
    annotation = _field_annotation(path)
    # Unknown keys and the flat backend URL keys of db_config are text
    if annotation is None or _is_text(annotation):
        return raw
    if _is_text_sequence(annotation):
        return _load_yaml(raw, yaml.BaseLoader)

    parsed = _load_yaml(raw, yaml.SafeLoader)
    return raw if isinstance(parsed, dict) else parsed


def _load_yaml(raw: str, loader: type) -> object:
    try:
        return yaml.load(raw, Loader=loader)  # noqa: S506
    except yaml.YAMLError:
        return raw


def _field_annotation(path: list[str]) -> object | None:
    model: type[BaseModel] | None = Config
    annotation: object | None = None
    for segment in path:
        field = model.model_fields.get(segment) if model is not None else None
        if field is None:
            return None
        annotation = field.annotation
        model = annotation if isinstance(annotation, type) and issubclass(annotation, BaseModel) else None
    return annotation


def _alternatives(annotation: object) -> tuple[object, ...]:
    origin = get_origin(annotation)
    if origin is Annotated:
        return _alternatives(get_args(annotation)[0])
    if origin is Union or origin is UnionType:
        return tuple(alt for arg in get_args(annotation) if arg is not type(None) for alt in _alternatives(arg))
    return (annotation,)


def _is_text(annotation: object) -> bool:
    return any(alt in _TEXT_TYPES for alt in _alternatives(annotation))


def _is_text_sequence(annotation: object) -> bool:
    for alt in _alternatives(annotation):
        if get_origin(alt) in (tuple, list) and any(_is_text(arg) for arg in get_args(alt) if arg is not Ellipsis):
            return True
    return False
