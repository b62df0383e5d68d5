from __future__ import annotations

import logging

import pytest

from streamlog.levels import LogLevel


def test_levels_are_ordered() -> None:
    ordered = [
        LogLevel.DEBUG,
        LogLevel.INFO,
        LogLevel.NOTICE,
        LogLevel.WARNING,
        LogLevel.ERROR,
        LogLevel.CRITICAL,
        LogLevel.ALERT,
        LogLevel.EMERGENCY,
    ]
    assert sorted(ordered) == ordered


@pytest.mark.parametrize(
    "value, expected",
    [
        ("warning", LogLevel.WARNING),
        (" Error ", LogLevel.ERROR),
        (LogLevel.ALERT, LogLevel.ALERT),
        (250, LogLevel.NOTICE),
        (logging.DEBUG, LogLevel.DEBUG),
        (logging.INFO, LogLevel.INFO),
        (logging.WARNING, LogLevel.WARNING),
        (logging.ERROR + 5, LogLevel.ERROR),
        (logging.CRITICAL, LogLevel.CRITICAL),
    ],
)
def test_coerce(value, expected) -> None:
    assert LogLevel.coerce(value) is expected


@pytest.mark.parametrize("value", ["loud", "", None, True, 1.5])
def test_coerce_rejects_unknown(value) -> None:
    with pytest.raises(ValueError):
        LogLevel.coerce(value)


def test_label_is_lowercase_name() -> None:
    assert LogLevel.EMERGENCY.label == "emergency"
