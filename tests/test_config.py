from __future__ import annotations

import pytest

from streamlog.config import Settings
from streamlog.levels import LogLevel


def test_defaults() -> None:
    settings = Settings.from_env({})
    assert settings.path == "logs/app.log"
    assert settings.min_level is LogLevel.DEBUG
    assert settings.use_locking is True
    assert settings.file_permission is None


def test_values_from_environment() -> None:
    settings = Settings.from_env(
        {
            "STREAMLOG_PATH": "/var/log/svc.log",
            "STREAMLOG_MIN_LEVEL": "Warning",
            "STREAMLOG_USE_LOCKING": "off",
            "STREAMLOG_FILE_PERMISSION": "640",
            "STREAMLOG_CHANNEL": "svc",
        }
    )
    assert settings.path == "/var/log/svc.log"
    assert settings.min_level is LogLevel.WARNING
    assert settings.use_locking is False
    assert settings.file_permission == 0o640
    assert settings.channel == "svc"


@pytest.mark.parametrize(
    "env",
    [
        {"STREAMLOG_MIN_LEVEL": "chatty"},
        {"STREAMLOG_USE_LOCKING": "maybe"},
        {"STREAMLOG_FILE_PERMISSION": "rw-r--r--"},
    ],
)
def test_invalid_values_raise(env) -> None:
    with pytest.raises(ValueError):
        Settings.from_env(env)


def test_build_logger_is_lazy(tmp_path) -> None:
    target = tmp_path / "svc" / "app.log"
    writer = Settings.from_env({"STREAMLOG_PATH": str(target), "STREAMLOG_CHANNEL": "svc"}).build_logger()

    assert writer.url == str(target)
    assert writer.channel == "svc"
    assert not writer.is_open
    assert not target.parent.exists()
