from __future__ import annotations

import errno
import io
import sys
from pathlib import Path
from typing import List

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from streamlog.telemetry import StreamLogger  # noqa: E402


class FlakyStream(io.StringIO):
    """StringIO whose next ``failures`` writes raise an I/O error."""

    def __init__(self, failures: int = 0) -> None:
        super().__init__()
        self.failures = failures
        self.written: List[str] = []

    def write(self, s):
        if self.failures:
            self.failures -= 1
            raise OSError(errno.EIO, "Input/output error")
        self.written.append(s)
        return super().write(s)


class ScriptedLogger(StreamLogger):
    """StreamLogger that hands out prepared streams instead of opening files."""

    def __init__(self, streams, *args, **kwargs) -> None:
        self.streams = list(streams)
        self.opened: List[FlakyStream] = []
        super().__init__(*args, **kwargs)

    def _open(self, url):
        stream = self.streams.pop(0)
        self.opened.append(stream)
        return stream


@pytest.fixture
def log_path(tmp_path: Path) -> Path:
    return tmp_path / "logs" / "app.log"
