"""Destination resolution: turn a caller-supplied path or URL into the target the logger opens.

Nothing here touches the filesystem except for reading the current directory.
"""

import os
from typing import Optional

FILE_SCHEME = "file://"
MEMORY_URL = "memory://"


def canonicalize_path(stream_url: str) -> str:
    """Make a relative path absolute against the current working directory.

    ``file://`` URLs are resolved on their path part and keep the prefix.
    Any other ``scheme://`` URL is returned untouched.

    Args:
        stream_url: Stream URL or plain path.

    Returns:
        The absolute path, or the URL unchanged.
    """
    prefix = ""
    if stream_url.startswith(FILE_SCHEME):
        stream_url = stream_url[len(FILE_SCHEME):]
        prefix = FILE_SCHEME

    # other kind of stream, left alone
    if "://" in stream_url:
        return prefix + stream_url

    if stream_url.startswith("/") or stream_url[1:2] == ":" or stream_url.startswith("\\\\"):
        return prefix + stream_url

    return prefix + os.getcwd() + "/" + stream_url


def directory_of(stream_url: str) -> Optional[str]:
    """Parent directory of a resolved target, or None when it has no filesystem directory."""
    if stream_url.startswith(FILE_SCHEME):
        directory = os.path.dirname(stream_url[len(FILE_SCHEME):])
    elif "://" in stream_url:
        return None
    else:
        directory = os.path.dirname(stream_url)
    return directory or None


def filesystem_path(stream_url: str) -> Optional[str]:
    """The path to hand to open(), or None for URLs that are not files."""
    if stream_url.startswith(FILE_SCHEME):
        return stream_url[len(FILE_SCHEME):]
    if "://" in stream_url:
        return None
    return stream_url


def is_memory_url(stream_url: Optional[str]) -> bool:
    return stream_url == MEMORY_URL
