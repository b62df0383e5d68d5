"""Scoped capture of low-level errors raised by open/write/mkdir calls."""

import re
import warnings
from typing import Optional, Tuple, Type

_ERRNO_PREFIX = re.compile(r"^\[Errno \d+\] ")
_SYSCALL_PREFIX = re.compile(r"^(open|mkdir|makedirs|write)\(.*?\): ")


def _clean(message: str) -> str:
    message = _ERRNO_PREFIX.sub("", message)
    return _SYSCALL_PREFIX.sub("", message)


class ErrorCapture:
    """Context manager that turns a failing system call into a checkable message.

    While the block runs, warnings are recorded instead of printed. On exit the
    previous warnings state is restored, whatever happened inside. An exception
    of one of ``catch`` types is suppressed and its text kept in ``message``;
    failing that, the text of the last recorded warning is kept. Any other
    exception propagates.

    Usage:
        capture = ErrorCapture()
        with capture:
            fh = open(path, "a")
        if capture.failed:
            ...
    """

    def __init__(self, catch: Tuple[Type[BaseException], ...] = (OSError,)) -> None:
        self.catch = catch
        self.message: Optional[str] = None
        self.errno: Optional[int] = None
        self._catcher = None
        self._records = None

    @property
    def failed(self) -> bool:
        return self.message is not None

    def clear(self) -> None:
        self.message = None
        self.errno = None

    def __enter__(self) -> "ErrorCapture":
        self.clear()
        self._catcher = warnings.catch_warnings(record=True)
        self._records = self._catcher.__enter__()
        warnings.simplefilter("always")
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        catcher, records = self._catcher, self._records
        self._catcher = self._records = None
        catcher.__exit__(exc_type, exc, tb)

        if exc is not None:
            if not isinstance(exc, self.catch):
                return False
            self.errno = getattr(exc, "errno", None)
            self.message = _clean(getattr(exc, "strerror", None) or str(exc) or exc_type.__name__)
            return True

        if records:
            self.message = _clean(str(records[-1].message))
        return False
