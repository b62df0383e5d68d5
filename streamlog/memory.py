"""I/O chunk size derived from the process memory ceiling."""

import os
import re
from typing import Optional

import resource

MAX_CHUNK_SIZE = 2147483647
MIN_CHUNK_SIZE = 100 * 1024
DEFAULT_CHUNK_SIZE = 10 * 1024 * 1024  # 10MB

MEMORY_LIMIT_ENV = "STREAMLOG_MEMORY_LIMIT"

_LIMIT_RE = re.compile(r"^\s*(?P<limit>\d+)(?:\.\d+)?\s*(?P<unit>[gmk]?)\s*$", re.IGNORECASE)
_UNLIMITED_RE = re.compile(r"^\s*(-\d+)")
_UNIT_FACTORS = {"": 1, "k": 1024, "m": 1024 ** 2, "g": 1024 ** 3}


def configured_memory_limit() -> Optional[str]:
    """The memory ceiling as configured for this process.

    STREAMLOG_MEMORY_LIMIT wins when set. Otherwise the address-space rlimit
    is used, reported as "-1" when unlimited.
    """
    raw = os.getenv(MEMORY_LIMIT_ENV)
    if raw is not None:
        return raw
    soft, _hard = resource.getrlimit(resource.RLIMIT_AS)
    if soft == resource.RLIM_INFINITY:
        return "-1"
    return str(soft)


def memory_limit_in_bytes(raw: Optional[str]) -> Optional[int]:
    """Parse a ceiling such as "128M", "2g", "1048576" or "-1".

    Returns the byte count, a negative number for "unlimited", or None when
    the value is missing or unreadable.
    """
    if raw is None:
        return None
    raw = str(raw)
    unlimited = _UNLIMITED_RE.match(raw)
    if unlimited:
        return int(unlimited.group(1))

    match = _LIMIT_RE.match(raw)
    if not match:
        return None
    return int(match.group("limit")) * _UNIT_FACTORS[match.group("unit").lower()]


def chunk_size_for(limit: Optional[int]) -> int:
    """Use at most 10% of the allowed memory, and at least 100KB."""
    if limit is None or limit <= 0:
        return DEFAULT_CHUNK_SIZE
    return min(MAX_CHUNK_SIZE, max(limit // 10, MIN_CHUNK_SIZE))
