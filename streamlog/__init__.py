"""Resilient append-only log writer."""

from streamlog.capture import ErrorCapture
from streamlog.errors import (
    DirectoryCreationFailure,
    InvalidDestination,
    StreamLogError,
    StreamUnavailable,
    UnexpectedOpenFailure,
    WriteFailure,
)
from streamlog.handler import StreamLoggerHandler
from streamlog.levels import LogLevel
from streamlog.paths import MEMORY_URL, canonicalize_path
from streamlog.telemetry import BorrowedHandle, OwnedPath, StreamLogger

__all__ = [
    "BorrowedHandle",
    "DirectoryCreationFailure",
    "ErrorCapture",
    "InvalidDestination",
    "LogLevel",
    "MEMORY_URL",
    "OwnedPath",
    "StreamLogError",
    "StreamLogger",
    "StreamLoggerHandler",
    "StreamUnavailable",
    "UnexpectedOpenFailure",
    "WriteFailure",
    "canonicalize_path",
]
