import fcntl
import io
import json
import logging
import os
from dataclasses import dataclass
from datetime import datetime
from typing import IO, Any, Mapping, Optional, Union

from streamlog.capture import ErrorCapture
from streamlog.errors import (
    DirectoryCreationFailure,
    InvalidDestination,
    StreamUnavailable,
    UnexpectedOpenFailure,
    WriteFailure,
)
from streamlog.levels import LevelLike, LogLevel
from streamlog.memory import chunk_size_for, configured_memory_limit, memory_limit_in_bytes
from streamlog.paths import canonicalize_path, directory_of, filesystem_path, is_memory_url

logger = logging.getLogger(__name__)

LOG_FORMAT = "[{datetime}] {channel}.{level_name}: {message} {context}\n"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


@dataclass(frozen=True)
class OwnedPath:
    """A path or URL the logger opens and closes itself."""

    url: str


@dataclass(frozen=True)
class BorrowedHandle:
    """An open stream owned by the caller. The logger never closes it."""

    stream: IO


Destination = Union[OwnedPath, BorrowedHandle]


def as_destination(target: Any) -> Destination:
    if isinstance(target, OwnedPath):
        return OwnedPath(canonicalize_path(target.url))
    if isinstance(target, BorrowedHandle):
        return target
    if isinstance(target, (str, os.PathLike)):
        path = os.fspath(target)
        if isinstance(path, str):
            return OwnedPath(canonicalize_path(path))
    elif callable(getattr(target, "write", None)):
        return BorrowedHandle(target)
    raise InvalidDestination("A destination must either be a writable stream or a path string.")


def format_record(
    channel: str,
    level: LogLevel,
    message: Any,
    context: Optional[Mapping[str, Any]] = None,
    now: Optional[datetime] = None,
) -> str:
    return LOG_FORMAT.format(
        datetime=(now or datetime.now()).strftime(DATE_FORMAT),
        channel=channel,
        level_name=level.label,
        message=str(message).strip(),
        context=json.dumps(dict(context or {}), ensure_ascii=False, separators=(",", ":"), default=str),
    )


class StreamLogger:
    """Append log lines to a stream or a file, reopening once when a write fails.

    Paths are opened lazily on the first accepted record, with the parent
    directory created if needed. Streams passed in by the caller are used
    as-is and never closed or retried.
    """

    canonicalize_path = staticmethod(canonicalize_path)

    def __init__(
        self,
        destination: Any,
        minimum_level: LevelLike = LogLevel.DEBUG,
        file_permission: Optional[int] = None,
        use_locking: bool = False,
        file_open_mode: str = "a",
        channel: str = "app",
        memory_limit: Optional[Union[str, int]] = None,
    ) -> None:
        """
        Args:
            destination: Path string / PathLike, a writable stream, or a prebuilt
                OwnedPath / BorrowedHandle.
            minimum_level: Records below this level are dropped.
            file_permission: Mode bits applied to the file after opening it.
            use_locking: Take an exclusive flock around every write.
            file_open_mode: open() mode for path destinations.
            channel: Prefix written before the level name.
            memory_limit: Memory ceiling ("128M", "-1", ...) the I/O chunk size
                is derived from. Read from the process when omitted.

        Raises:
            InvalidDestination: If destination is neither a path nor a stream.
        """
        self._stream: Optional[IO] = None
        self._directory_ensured = False
        self.destination: Optional[Destination] = None

        self.minimum_level = LogLevel.coerce(minimum_level)
        raw_limit = configured_memory_limit() if memory_limit is None else str(memory_limit)
        self.chunk_size = chunk_size_for(memory_limit_in_bytes(raw_limit))

        self.destination = as_destination(destination)
        if isinstance(self.destination, BorrowedHandle):
            self._stream = self.destination.stream

        self.file_permission = file_permission
        self.use_locking = use_locking
        self.file_open_mode = file_open_mode
        self.channel = channel
        self._capture = ErrorCapture(catch=(OSError, ValueError))

    @property
    def url(self) -> Optional[str]:
        if isinstance(self.destination, OwnedPath):
            return self.destination.url
        return None

    @property
    def is_open(self) -> bool:
        return self._stream is not None

    @property
    def directory_ensured(self) -> bool:
        return self._directory_ensured

    @property
    def last_capture_message(self) -> Optional[str]:
        return self._capture.message

    def log(self, level: LevelLike, message: Any, context: Optional[Mapping[str, Any]] = None) -> None:
        level = LogLevel.coerce(level)
        if level < self.minimum_level:
            return
        self._write(level, message, context, retrying=False)

    def _write(self, level: LogLevel, message: Any, context: Optional[Mapping[str, Any]], retrying: bool) -> None:
        line = format_record(self.channel, level, message, context)
        stream = self._ensure_open()
        if self.use_locking:
            self._flock(stream, fcntl.LOCK_EX)
        try:
            with self._capture:
                stream.write(self._encode(stream, line))
                stream.flush()
        finally:
            if self.use_locking:
                self._flock(stream, fcntl.LOCK_UN)

        if self._capture.failed:
            error = self._capture.message
            # close the stream to reopen it, and retry the failed write once
            if not retrying and self._retryable():
                self.close()
                logger.warning("Write to %s failed (%s); reopening and retrying once", self.url, error)
                self._write(level, message, context, retrying=True)
                return
            raise WriteFailure(f"Writing to the log file failed: {error}")

    def _retryable(self) -> bool:
        return isinstance(self.destination, OwnedPath) and not is_memory_url(self.url)

    def _ensure_open(self) -> IO:
        if self._stream is not None:
            return self._stream

        url = self.url
        if not url:
            raise StreamUnavailable(
                "Missing stream url, the stream can not be opened. "
                "This may be caused by a premature call to close()"
            )
        self._ensure_directory(url)

        stream = None
        with self._capture:
            stream = self._open(url)
        if stream is not None and self.file_permission is not None:
            self._apply_permission(url)

        if stream is None:
            raise UnexpectedOpenFailure(
                f"The stream could not be opened in {self.file_open_mode!r} mode: {self._capture.message}"
            )
        self._stream = stream
        return stream

    def _open(self, url: str) -> IO:
        binary = "b" in self.file_open_mode
        if is_memory_url(url):
            return io.BytesIO() if binary else io.StringIO()

        path = filesystem_path(url)
        if path is None:
            raise ValueError(f"Unsupported stream url {url!r}")
        if binary:
            return open(path, self.file_open_mode, buffering=self.chunk_size)
        return open(path, self.file_open_mode, buffering=self.chunk_size, encoding="utf-8")

    def _apply_permission(self, url: str) -> None:
        path = filesystem_path(url)
        if path is None:
            return
        try:
            os.chmod(path, self.file_permission)
        except OSError as exc:
            logger.debug("Could not set permissions %o on %s: %s", self.file_permission, path, exc)

    def _ensure_directory(self, url: str) -> None:
        # Only try once per open lifecycle
        if self._directory_ensured:
            return

        directory = directory_of(url)
        if directory is not None and not os.path.isdir(directory):
            with self._capture:
                os.makedirs(directory, 0o777)
            if self._capture.failed:
                if not os.path.isdir(directory):
                    raise DirectoryCreationFailure(
                        f'There is no existing directory at "{directory}" and it could not be created: '
                        f"{self._capture.message}"
                    )
                logger.debug("Directory %s was created concurrently (%s)", directory, self._capture.message)
        self._directory_ensured = True

    @staticmethod
    def _encode(stream: IO, line: str) -> Union[str, bytes]:
        if isinstance(stream, io.TextIOBase):
            return line
        if isinstance(stream, (io.RawIOBase, io.BufferedIOBase)) or "b" in str(getattr(stream, "mode", "")):
            return line.encode("utf-8")
        return line

    @staticmethod
    def _flock(stream: IO, operation: int) -> None:
        # Best effort: a failed lock degrades to an unlocked write
        try:
            fcntl.flock(stream.fileno(), operation)
        except (OSError, ValueError) as exc:
            logger.debug("flock(%d) failed: %s", operation, exc)

    def close(self) -> None:
        stream, self._stream = self._stream, None
        if stream is not None and isinstance(self.destination, OwnedPath):
            try:
                stream.close()
            except (OSError, ValueError) as exc:
                logger.warning("Closing %s failed: %s", self.url, exc)
        self._directory_ensured = False

    def __enter__(self) -> "StreamLogger":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def __del__(self) -> None:
        self.close()

    def debug(self, message: Any, context: Optional[Mapping[str, Any]] = None) -> None:
        self.log(LogLevel.DEBUG, message, context)

    def info(self, message: Any, context: Optional[Mapping[str, Any]] = None) -> None:
        self.log(LogLevel.INFO, message, context)

    def notice(self, message: Any, context: Optional[Mapping[str, Any]] = None) -> None:
        self.log(LogLevel.NOTICE, message, context)

    def warning(self, message: Any, context: Optional[Mapping[str, Any]] = None) -> None:
        self.log(LogLevel.WARNING, message, context)

    def error(self, message: Any, context: Optional[Mapping[str, Any]] = None) -> None:
        self.log(LogLevel.ERROR, message, context)

    def critical(self, message: Any, context: Optional[Mapping[str, Any]] = None) -> None:
        self.log(LogLevel.CRITICAL, message, context)

    def alert(self, message: Any, context: Optional[Mapping[str, Any]] = None) -> None:
        self.log(LogLevel.ALERT, message, context)

    def emergency(self, message: Any, context: Optional[Mapping[str, Any]] = None) -> None:
        self.log(LogLevel.EMERGENCY, message, context)
