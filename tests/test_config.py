from pathlib import Path

import pytest
from pydantic import ValidationError

from errchain.config import Settings, get_settings


def test_settings_defaults() -> None:
    settings = Settings()
    assert settings.capture_stack is True
    assert settings.stack_limit == 32
    assert settings.log_traceback_tail == 6


def test_settings_reads_env_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    env = tmp_path / ".env"
    env.write_text(
        "\n".join(
            [
                "ERRCHAIN_CAPTURE_STACK=0",
                "ERRCHAIN_STACK_LIMIT=5",
                "UNRELATED_VARIABLE=x",
            ]
        )
    )
    monkeypatch.chdir(str(tmp_path))
    settings = Settings()
    assert settings.capture_stack is False
    assert settings.stack_limit == 5


def test_settings_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ERRCHAIN_STACK_LIMIT", "10")
    monkeypatch.setenv("ERRCHAIN_LOG_TRACEBACK_TAIL", "3")
    settings = Settings()
    assert settings.stack_limit == 10
    assert settings.log_traceback_tail == 3


def test_settings_rejects_non_positive_limit(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ERRCHAIN_STACK_LIMIT", "0")
    with pytest.raises(ValidationError):
        Settings()


@pytest.mark.parametrize(
    "value, expected",
    [
        ("1", True),
        ("true", True),
        ("yes", True),
        ("0", False),
        ("no", False),
        ("", False),
    ],
)
def test_settings_capture_stack_variants(
    monkeypatch: pytest.MonkeyPatch, value: str, expected: bool
) -> None:
    monkeypatch.setenv("ERRCHAIN_CAPTURE_STACK", value)
    assert Settings().capture_stack is expected


def test_get_settings_is_cached(set_env) -> None:
    first = get_settings()
    assert get_settings() is first
    set_env(ERRCHAIN_STACK_LIMIT="7")
    assert get_settings() is not first
    assert get_settings().stack_limit == 7
