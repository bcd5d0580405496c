"""Pair golden and candidate change records by normalized path."""

from __future__ import annotations

import re
from typing import Dict, List, Sequence

from diffgrade.analysis.models import MatchedPair, MatchResult
from diffgrade.git.models import ChangeRecord

EXCLUDED_PATTERNS = [
    re.compile(r"\.snap$"),
    re.compile(r"package-lock\.json$"),
    re.compile(r"yarn\.lock$"),
    re.compile(r"pnpm-lock\.yaml$"),
]


def normalize_path(path: str) -> str:
    """Strip one leading ``a/``/``b/`` segment and use forward slashes."""
    if path.startswith(("a/", "b/")):
        path = path[2:]
    return path.replace("\\", "/")


def is_excluded(path: str) -> bool:
    """True for snapshots and lockfiles, which never count toward a grade."""
    normalized = normalize_path(path)
    return any(p.search(normalized) for p in EXCLUDED_PATTERNS)


def match_files(
    golden: Sequence[ChangeRecord],
    candidate: Sequence[ChangeRecord],
) -> MatchResult:
    """Partition both record lists into matched pairs, missed and extra files.

    Matching is exact normalized-path equality. Each candidate record pairs
    with at most one golden record, so duplicate paths still partition
    cleanly: every non-excluded record lands in exactly one bucket.
    """
    pool: Dict[str, List[ChangeRecord]] = {}
    for record in candidate:
        if is_excluded(record.path):
            continue
        pool.setdefault(normalize_path(record.path), []).append(record)

    matched: List[MatchedPair] = []
    missed: List[ChangeRecord] = []
    for record in golden:
        if is_excluded(record.path):
            continue
        key = normalize_path(record.path)
        waiting = pool.get(key)
        if waiting:
            matched.append(MatchedPair(path=key, golden=record, candidate=waiting.pop(0)))
        else:
            missed.append(record)

    paired = {id(pair.candidate) for pair in matched}
    extra = [
        record
        for record in candidate
        if not is_excluded(record.path) and id(record) not in paired
    ]

    return MatchResult(matched=tuple(matched), missed=tuple(missed), extra=tuple(extra))
