from __future__ import annotations

import os

import pytest

from ktra.common import Features
from ktra.settings import settings


@pytest.fixture(autouse=True)
def _isolate_config_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in list(os.environ.keys()):
        if key.startswith("KTRA_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.setattr(settings, "features", Features())
