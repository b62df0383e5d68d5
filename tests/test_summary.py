from __future__ import annotations

from pathlib import Path

from streamlog.summary import parse_line, percentile, summarize
from streamlog.telemetry import StreamLogger


def test_parse_line_round_trips_a_written_line() -> None:
    parsed = parse_line('[2026-01-02 03:04:05] app.error: disk full {"code":5}\n')

    assert parsed is not None
    assert parsed.timestamp.year == 2026
    assert parsed.channel == "app"
    assert parsed.level == "error"
    assert parsed.message == "disk full"
    assert parsed.context == {"code": 5}


def test_parse_line_with_braces_in_message_and_dotted_channel() -> None:
    parsed = parse_line('[2026-01-02 03:04:05] svc.http.info: got {x} here {"a":1}')

    assert parsed.channel == "svc.http"
    assert parsed.message == "got {x} here"
    assert parsed.context == {"a": 1}


def test_parse_line_empty_message() -> None:
    parsed = parse_line("[2026-01-02 03:04:05] app.info:  {}")
    assert parsed.message == ""
    assert parsed.context == {}


def test_parse_line_rejects_foreign_lines() -> None:
    assert parse_line("just some text") is None
    assert parse_line("[2026-01-02 03:04:05] nolevel: x {}") is None


def test_percentile() -> None:
    assert percentile([], 50) is None
    assert percentile([1, 2, 3, 4, 5], 50) == 3


def test_summarize(tmp_path: Path) -> None:
    path = tmp_path / "app.log"
    writer = StreamLogger(path)
    writer.info("GET /health", {"latency_ms": 1.5})
    writer.warning("GET /missing", {"latency_ms": 3.0})
    writer.error("boom")
    writer.close()
    with path.open("a", encoding="utf-8") as f:
        f.write("garbage\n")

    summary = summarize([path])

    assert summary.total == 3
    assert summary.skipped == 1
    assert summary.levels == {"info": 1, "warning": 1, "error": 1}
    assert sorted(summary.latencies) == [1.5, 3.0]
    assert "Total lines: 3" in summary.to_lines()
