from collections.abc import Iterator
from pathlib import Path

import pytest

from errchain.config import get_settings


@pytest.fixture(autouse=True)
def clean_settings(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Isolate every test from ERRCHAIN_* variables and stray .env files."""
    for name in ("ERRCHAIN_CAPTURE_STACK", "ERRCHAIN_STACK_LIMIT", "ERRCHAIN_LOG_TRACEBACK_TAIL"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def set_env(monkeypatch: pytest.MonkeyPatch):
    """Set environment variables and drop the cached settings."""

    def apply(**values: str) -> None:
        for name, value in values.items():
            monkeypatch.setenv(name, value)
        get_settings.cache_clear()

    return apply
