"""Storage backend selection for the auth/metadata database."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Any, Literal

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    SerializerFunctionWrapHandler,
    StrictStr,
    ValidationInfo,
    model_serializer,
    model_validator,
)

from ktra.common import ConnectionUrl, DbBackendKind

from .defaults import DB_DIR_NAME, login_prefix_default, mongodb_url_default, redis_url_default

# Validation context key carrying the deployment's backend when the document names none
DB_BACKEND_CONTEXT_KEY = "db_backend"

DEFAULT_DB_BACKEND: DbBackendKind = "sled"


class SledBackend(BaseModel):
    """Embedded store living under ``<root_dir_path>/db``."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: Literal["sled"] = "sled"

    @staticmethod
    def db_dir_path_relative() -> Path:
        return Path(DB_DIR_NAME)


class RedisBackend(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: Literal["redis"] = "redis"
    redis_url: ConnectionUrl = Field(default_factory=redis_url_default)


class MongoBackend(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: Literal["mongo"] = "mongo"
    mongodb_url: ConnectionUrl = Field(default_factory=mongodb_url_default)


DbBackend = Annotated[SledBackend | RedisBackend | MongoBackend, Field(discriminator="kind")]

_URL_KEY_OWNERS: dict[str, DbBackendKind] = {
    "redis_url": "redis",
    "mongodb_url": "mongo",
}


class DbConfig(BaseModel):
    """Database settings: the shared login prefix plus the active backend.

    The document keeps the flat layout::

        [db_config]
        login_prefix = "ktra-secure-auth:"
        backend = "redis"          # optional, falls back to the deployment setting
        redis_url = "redis://cache:6379"

    and is folded into ``backend`` on validation. Only the selected backend's
    connection key is accepted.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    login_prefix: StrictStr = Field(default_factory=login_prefix_default)
    backend: DbBackend = Field(default_factory=SledBackend)

    @property
    def kind(self) -> DbBackendKind:
        return self.backend.kind

    @model_validator(mode="before")
    @classmethod
    def _select_backend(cls, data: Any, info: ValidationInfo) -> Any:
        if not isinstance(data, dict):
            return data

        data = dict(data)
        backend = data.get("backend")
        url_keys = {key: data.pop(key) for key in _URL_KEY_OWNERS if key in data}

        if isinstance(backend, dict | BaseModel):
            if url_keys:
                raise ValueError(f"Connection keys {sorted(url_keys)} must be set inside 'backend'")
            return data

        if backend is None:
            context = info.context or {}
            backend = context.get(DB_BACKEND_CONTEXT_KEY, DEFAULT_DB_BACKEND)

        for key in url_keys:
            owner = _URL_KEY_OWNERS[key]
            if owner != backend:
                raise ValueError(f"'{key}' is only valid for the '{owner}' backend (selected backend: '{backend}')")

        data["backend"] = {"kind": backend, **url_keys}
        return data

    @model_serializer(mode="wrap")
    def _serialize_flat(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        data = handler(self)
        backend = data.pop("backend", None)
        if not isinstance(backend, dict):
            return data
        backend = dict(backend)
        return {**data, "backend": backend.pop("kind"), **backend}
