"""Noise scanner — penalties for changes that don't belong in the candidate."""

from __future__ import annotations

import re
from typing import Iterable, List, Sequence

from diffgrade.analysis.matcher import is_excluded
from diffgrade.analysis.models import MatchResult
from diffgrade.detectors.models import DetectionStatus, FileDetection
from diffgrade.git.models import ChangeRecord
from diffgrade.scoring.models import NOISE_PENALTIES, NoiseCategory, NoiseInstance

ARTIFACT_PATTERNS = [
    re.compile(r"\bconsole\.log\("),
    re.compile(r"\bconsole\.debug\("),
    re.compile(r"//\s*TODO\b"),
    re.compile(r"//\s*@ts-ignore\b"),
    re.compile(r"\bdebugger\b"),
]

PLACEHOLDER_PATTERNS = [
    re.compile(r"\bt_temp_dev_tbd\b"),
    re.compile(r"\bTEMP_PLACEHOLDER\b"),
    re.compile(r"\bPLACEHOLDER\b"),
    re.compile(r"\bFIXME\b"),
    re.compile(r"\bHACK\b"),
    re.compile(r"\bXXX\b"),
]

_WHITESPACE_RE = re.compile(r"\s+")


def _instance(
    category: NoiseCategory, file: str, description: str, line: int | None = None
) -> NoiseInstance:
    return NoiseInstance(
        category=category,
        file=file,
        description=description,
        penalty=NOISE_PENALTIES[category],
        line=line,
    )


# ── scans ───────────────────────────────────────────────────────────


def unnecessary_changes(match: MatchResult) -> List[NoiseInstance]:
    return [
        _instance("unnecessary_change", r.path, "File changed in candidate but not in golden")
        for r in match.extra
    ]


def is_formatting_only(record: ChangeRecord) -> bool:
    """Added and removed lines are the same multiset once whitespace is dropped."""
    removed = sorted(_WHITESPACE_RE.sub("", l.content) for l in record.removed_lines)
    added = sorted(_WHITESPACE_RE.sub("", l.content) for l in record.added_lines)
    return removed == added


def formatting_only_changes(match: MatchResult) -> List[NoiseInstance]:
    return [
        _instance(
            "formatting_only",
            pair.candidate.path,
            "Changes appear to be formatting/whitespace only",
        )
        for pair in match.matched
        if pair.candidate.has_changes and is_formatting_only(pair.candidate)
    ]


def incorrect_migrations(detections: Iterable[FileDetection]) -> List[NoiseInstance]:
    return [
        _instance(
            "incorrect_migration",
            fd.path,
            f"Incorrect change for {fd.detection.detector_id}: {fd.detection.message}",
        )
        for fd in detections
        if fd.detection.status is DetectionStatus.INCORRECT
    ]


def _line_markers(
    records: Sequence[ChangeRecord],
    patterns: List[re.Pattern[str]],
    category: NoiseCategory,
    label: str,
) -> List[NoiseInstance]:
    found: List[NoiseInstance] = []
    for record in records:
        for line in record.added_lines:
            # one instance per line, however many markers match
            if any(p.search(line.content) for p in patterns):
                found.append(
                    _instance(category, record.path, f"{label}: {line.content.strip()}", line.line_no)
                )
    return found


def artifacts(records: Sequence[ChangeRecord]) -> List[NoiseInstance]:
    return _line_markers(records, ARTIFACT_PATTERNS, "artifact", "Artifact detected")


def placeholder_tokens(records: Sequence[ChangeRecord]) -> List[NoiseInstance]:
    return _line_markers(
        records, PLACEHOLDER_PATTERNS, "placeholder_token", "Placeholder token detected"
    )


# ── entry point ─────────────────────────────────────────────────────


def scan_noise(
    match: MatchResult,
    candidate_records: Sequence[ChangeRecord],
    detections: Iterable[FileDetection],
) -> List[NoiseInstance]:
    """Concatenate the five independent noise scans."""
    scanned = [r for r in candidate_records if not is_excluded(r.path)]
    return [
        *unnecessary_changes(match),
        *formatting_only_changes(match),
        *incorrect_migrations(detections),
        *artifacts(scanned),
        *placeholder_tokens(scanned),
    ]
