"""Reusable Pydantic field annotations."""

from __future__ import annotations

from typing import Annotated

from pydantic import Field, StrictInt, StrictStr

Octet = Annotated[StrictInt, Field(ge=0, le=255)]

Port = Annotated[StrictInt, Field(ge=0, le=65535)]

# Remote git URL; reachability is checked by the git sync layer, not here
RemoteUrl = Annotated[StrictStr, Field(description="Git remote URL")]

# Connection string for a storage backend (redis://..., mongodb://...)
ConnectionUrl = Annotated[StrictStr, Field(min_length=1, description="Backend connection URL")]

FrozenStrings = tuple[StrictStr, ...]

__all__ = [
    "ConnectionUrl",
    "FrozenStrings",
    "Octet",
    "Port",
    "RemoteUrl",
]
