"""Report writers — JSON, Markdown, and the rich terminal summary."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path

_TS_PUNCT_RE = re.compile(r"[:.]")
_TS_SEP_RE = re.compile(r"[T ]")


@dataclass(frozen=True)
class ReportMetadata:
    timestamp: str
    golden_source: str
    candidate_source: str

    @classmethod
    def now(cls, golden_source: str, candidate_source: str) -> "ReportMetadata":
        stamp = datetime.now(timezone.utc).isoformat(timespec="milliseconds")
        return cls(
            timestamp=stamp.replace("+00:00", "Z"),
            golden_source=golden_source,
            candidate_source=candidate_source,
        )


def report_filename(timestamp: str, suffix: str) -> str:
    """``eval-report_<timestamp>.<suffix>`` with a filesystem-safe timestamp."""
    sanitized = _TS_SEP_RE.sub("_", _TS_PUNCT_RE.sub("-", timestamp))
    return f"eval-report_{sanitized}.{suffix}"


def write_text(output_dir: Path, filename: str, content: str) -> Path:
    output_dir.mkdir(parents=True, exist_ok=True)
    path = output_dir / filename
    path.write_text(content, encoding="utf-8")
    return path


__all__ = ["ReportMetadata", "report_filename", "write_text"]
