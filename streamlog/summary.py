"""Read back files written by StreamLogger and summarize them."""

import json
import re
from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from streamlog.telemetry import DATE_FORMAT

_LINE_RE = re.compile(r"^\[(?P<datetime>\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2})\] (?P<head>\S+?): (?P<rest>.*)$")


@dataclass
class ParsedLine:
    timestamp: datetime
    channel: str
    level: str
    message: str
    context: Dict[str, Any]


@dataclass
class LogSummary:
    total: int = 0
    skipped: int = 0
    levels: Counter = field(default_factory=Counter)
    latencies: List[float] = field(default_factory=list)

    def to_lines(self) -> List[str]:
        sorted_latencies = sorted(self.latencies)
        return [
            f"Total lines: {self.total}",
            f"Unparseable lines: {self.skipped}",
            f"Level counts: {dict(self.levels)}",
            f"p50 latency: {percentile(sorted_latencies, 50)}",
            f"p95 latency: {percentile(sorted_latencies, 95)}",
            f"p99 latency: {percentile(sorted_latencies, 99)}",
        ]


def percentile(values, p):
    if not values:
        return None
    k = int((len(values) - 1) * p / 100)
    return values[k]


def parse_line(line: str) -> Optional[ParsedLine]:
    """Split one written line into its parts, or None if it is not one of ours."""
    match = _LINE_RE.match(line.rstrip("\n"))
    if not match or "." not in match.group("head"):
        return None
    channel, level = match.group("head").rsplit(".", 1)
    rest = match.group("rest")

    # the context is the trailing JSON object; the message may itself contain braces
    for start, char in enumerate(rest):
        if char != "{" or (start > 0 and rest[start - 1] != " "):
            continue
        try:
            context = json.loads(rest[start:])
        except json.JSONDecodeError:
            continue
        if isinstance(context, dict):
            return ParsedLine(
                timestamp=datetime.strptime(match.group("datetime"), DATE_FORMAT),
                channel=channel,
                level=level,
                message=rest[: max(start - 1, 0)],
                context=context,
            )
    return None


def summarize(paths: Iterable[Path]) -> LogSummary:
    summary = LogSummary()
    for file_path in paths:
        with Path(file_path).open(encoding="utf-8") as f:
            for line in f:
                parsed = parse_line(line)
                if parsed is None:
                    summary.skipped += 1
                    continue
                summary.total += 1
                summary.levels[parsed.level] += 1
                latency = parsed.context.get("latency_ms")
                if isinstance(latency, (int, float)) and not isinstance(latency, bool):
                    summary.latencies.append(latency)
    return summary
