"""Ordered log levels used by the stream logger."""

import logging
from enum import IntEnum
from typing import Union

# stdlib logging thresholds, highest first
_STDLIB_THRESHOLDS = (
    (logging.CRITICAL, "CRITICAL"),
    (logging.ERROR, "ERROR"),
    (logging.WARNING, "WARNING"),
    (logging.INFO, "INFO"),
)


class LogLevel(IntEnum):
    """The eight syslog-style severities, lowest first."""

    DEBUG = 100
    INFO = 200
    NOTICE = 250
    WARNING = 300
    ERROR = 400
    CRITICAL = 500
    ALERT = 550
    EMERGENCY = 600

    @property
    def label(self) -> str:
        return self.name.lower()

    @classmethod
    def coerce(cls, level: Union["LogLevel", str, int]) -> "LogLevel":
        """
        Turn a level name ("warning"), a LogLevel, or a stdlib logging
        number (logging.WARNING) into a LogLevel.
        """
        if isinstance(level, cls):
            return level
        if isinstance(level, str):
            try:
                return cls[level.strip().upper()]
            except KeyError:
                raise ValueError(f"Unknown log level: {level!r}") from None
        if isinstance(level, int) and not isinstance(level, bool):
            if level in cls._value2member_map_:
                return cls(level)
            for threshold, name in _STDLIB_THRESHOLDS:
                if level >= threshold:
                    return cls[name]
            return cls.DEBUG
        raise ValueError(f"Unknown log level: {level!r}")


LevelLike = Union[LogLevel, str, int]
