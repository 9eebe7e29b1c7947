"""Common models used across ktra."""

from typing import Literal

from pydantic import BaseModel

from ktra.constants import APP_NAME

DbBackendKind = Literal["sled", "redis", "mongo"]


class AppInfo(BaseModel):
    project_name: str = APP_NAME
    version: str = "0.1.0"
    environment: Literal["test", "dev", "prod"] = "dev"


class Features(BaseModel):
    """Deployment-time feature selection.

    Attributes:
        db_backend: Storage backend the deployment is wired against
        crates_io_mirroring: Whether crates.io downloads are cached locally
    """

    db_backend: DbBackendKind = "sled"
    crates_io_mirroring: bool = False
