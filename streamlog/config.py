"""Environment-driven settings for the request-logging service."""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from streamlog.levels import LogLevel
from streamlog.telemetry import StreamLogger

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ValueError(f"{name} must be a boolean, got {raw!r}")


def _parse_permission(name: str, raw: str) -> int:
    try:
        return int(raw, 8)
    except ValueError:
        raise ValueError(f"{name} must be octal file mode bits, got {raw!r}") from None


@dataclass
class Settings:
    """Where and how the service writes its log."""

    path: str = "logs/app.log"
    min_level: LogLevel = LogLevel.DEBUG
    use_locking: bool = True
    file_permission: Optional[int] = None
    channel: str = "app"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """Read STREAMLOG_* variables, falling back to the defaults above."""
        env = os.environ if environ is None else environ
        settings = cls()
        if env.get("STREAMLOG_PATH"):
            settings.path = env["STREAMLOG_PATH"]
        if env.get("STREAMLOG_MIN_LEVEL"):
            settings.min_level = LogLevel.coerce(env["STREAMLOG_MIN_LEVEL"])
        if env.get("STREAMLOG_USE_LOCKING"):
            settings.use_locking = _parse_bool("STREAMLOG_USE_LOCKING", env["STREAMLOG_USE_LOCKING"])
        if env.get("STREAMLOG_FILE_PERMISSION"):
            settings.file_permission = _parse_permission("STREAMLOG_FILE_PERMISSION", env["STREAMLOG_FILE_PERMISSION"])
        if env.get("STREAMLOG_CHANNEL"):
            settings.channel = env["STREAMLOG_CHANNEL"]
        return settings

    def build_logger(self) -> StreamLogger:
        return StreamLogger(
            self.path,
            minimum_level=self.min_level,
            file_permission=self.file_permission,
            use_locking=self.use_locking,
            channel=self.channel,
        )
