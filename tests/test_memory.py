from __future__ import annotations

import pytest

from streamlog.memory import (
    DEFAULT_CHUNK_SIZE,
    MAX_CHUNK_SIZE,
    MIN_CHUNK_SIZE,
    chunk_size_for,
    configured_memory_limit,
    memory_limit_in_bytes,
)


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("128M", 128 * 1024 * 1024),
        ("128m", 128 * 1024 * 1024),
        ("2G", 2 * 1024 ** 3),
        ("512k", 512 * 1024),
        (" 1024 ", 1024),
        ("1.5G", 1024 ** 3),
        ("-1", -1),
        ("lots", None),
        ("12T", None),
        (None, None),
    ],
)
def test_memory_limit_in_bytes(raw, expected) -> None:
    assert memory_limit_in_bytes(raw) == expected


def test_chunk_size_for_128m_is_exact() -> None:
    assert chunk_size_for(memory_limit_in_bytes("128M")) == 13_421_772


def test_chunk_size_bounds() -> None:
    assert chunk_size_for(memory_limit_in_bytes("512k")) == MIN_CHUNK_SIZE
    assert chunk_size_for(memory_limit_in_bytes("100G")) == MAX_CHUNK_SIZE
    assert chunk_size_for(-1) == DEFAULT_CHUNK_SIZE
    assert chunk_size_for(None) == DEFAULT_CHUNK_SIZE


def test_configured_memory_limit_prefers_env(monkeypatch) -> None:
    monkeypatch.setenv("STREAMLOG_MEMORY_LIMIT", "64M")
    assert configured_memory_limit() == "64M"


def test_configured_memory_limit_falls_back_to_rlimit(monkeypatch) -> None:
    monkeypatch.delenv("STREAMLOG_MEMORY_LIMIT", raising=False)
    raw = configured_memory_limit()
    assert raw is None or memory_limit_in_bytes(raw) is not None
