"""Bridge from the stdlib ``logging`` module onto a StreamLogger."""

import logging
from typing import Any, Dict

from streamlog.levels import LogLevel
from streamlog.telemetry import StreamLogger

# attributes every LogRecord carries; anything else came in through ``extra``
_RECORD_FIELDS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", (), None)).keys()
) | {"message", "asctime", "taskName"}

_OWN_LOGGER = "streamlog"


class StreamLoggerHandler(logging.Handler):
    """logging.Handler that writes each record through a StreamLogger.

    The context of the written line holds the logger name and any ``extra``
    fields passed to the logging call.
    """

    def __init__(self, writer: StreamLogger, level: int = logging.NOTSET) -> None:
        super().__init__(level)
        self.writer = writer
        self._emitting = False

    def filter(self, record: logging.LogRecord) -> bool:
        # the writer's own diagnostics must not be written back through it
        name = record.name or ""
        if name == _OWN_LOGGER or name.startswith(_OWN_LOGGER + "."):
            return False
        return super().filter(record)

    def context_for(self, record: logging.LogRecord) -> Dict[str, Any]:
        context: Dict[str, Any] = {"logger": record.name}
        for key, value in vars(record).items():
            if key not in _RECORD_FIELDS and not key.startswith("_"):
                context[key] = value
        if record.exc_info:
            context["exception"] = logging.Formatter().formatException(record.exc_info)
        return context

    def emit(self, record: logging.LogRecord) -> None:
        if self._emitting:
            return
        self._emitting = True
        try:
            self.writer.log(LogLevel.coerce(record.levelno), record.getMessage(), self.context_for(record))
        except Exception:
            self.handleError(record)
        finally:
            self._emitting = False

    def close(self) -> None:
        self.writer.close()
        super().close()
