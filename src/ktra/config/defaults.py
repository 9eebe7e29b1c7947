"""Default value producers for configuration fields.

Each producer returns a fresh value so mutable defaults are never shared
between models.
"""

from __future__ import annotations

from pathlib import Path

INDEX_DIR_NAME = "index"
DL_DIR_NAME = "crates"
CACHE_DIR_NAME = "crates_io_caches"
DB_DIR_NAME = "db"


def root_dir_path_default() -> Path:
    return Path("ktra_root")


def branch_default() -> str:
    return "main"


def git_name_default() -> str:
    return "ktra-driver"


def dl_path_default() -> tuple[str, ...]:
    return ("dl",)


def login_prefix_default() -> str:
    return "ktra-secure-auth:"


def redis_url_default() -> str:
    return "redis://localhost"


def mongodb_url_default() -> str:
    return "mongodb://localhost:27017"


def address_default() -> tuple[int, int, int, int]:
    return (0, 0, 0, 0)


def port_default() -> int:
    return 8000
