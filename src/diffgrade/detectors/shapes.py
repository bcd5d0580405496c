"""Line predicates and detector factories for the three common rule shapes.

* rename — golden removes OLD; the candidate must remove OLD and add NEW.
* removal — golden removes X; the candidate must remove X and not re-add it.
* replacement — golden removes OLD or adds NEW; adding NEW is enough.
"""

from __future__ import annotations

import re
from typing import Callable, Iterable, Optional, Union

from diffgrade.detectors.models import (
    Complexity,
    Detector,
    Verdict,
    correct,
    incorrect,
    missing,
)
from diffgrade.git.models import ChangeRecord, DiffLine

LinePredicate = Callable[[str], bool]
PatternLike = Union[str, re.Pattern]


def _compile(pattern: PatternLike) -> re.Pattern[str]:
    return pattern if isinstance(pattern, re.Pattern) else re.compile(pattern)


def any_of(*patterns: PatternLike) -> LinePredicate:
    """Line matches at least one of *patterns*."""
    compiled = [_compile(p) for p in patterns]
    return lambda text: any(p.search(text) for p in compiled)


def all_of(*patterns: PatternLike) -> LinePredicate:
    """Line matches every one of *patterns*."""
    compiled = [_compile(p) for p in patterns]
    return lambda text: all(p.search(text) for p in compiled)


def contains_any(*needles: str) -> LinePredicate:
    """Line contains at least one of the literal substrings."""
    return lambda text: any(n in text for n in needles)


def any_line(lines: Iterable[DiffLine], predicate: LinePredicate) -> bool:
    return any(predicate(line.content) for line in lines)


def removes(record: ChangeRecord, predicate: LinePredicate) -> bool:
    return any_line(record.removed_lines, predicate)


def adds(record: ChangeRecord, predicate: LinePredicate) -> bool:
    return any_line(record.added_lines, predicate)


# ---- factories ----


def rename_detector(
    *,
    id: str,
    name: str,
    description: str,
    old: LinePredicate,
    new: LinePredicate,
    old_label: str,
    new_label: str,
    complexity: Complexity = "trivial",
    subject: Optional[str] = None,
    correct_message: Optional[str] = None,
    incorrect_message: Optional[str] = None,
    missing_message: Optional[str] = None,
) -> Detector:
    def evaluate(golden: ChangeRecord, candidate: ChangeRecord) -> Verdict:
        if removes(candidate, old):
            if adds(candidate, new):
                return correct(correct_message or f"{old_label} correctly renamed to {new_label}")
            return incorrect(incorrect_message or f"{old_label} removed but {new_label} not added")
        return missing(missing_message or f"{old_label} -> {new_label} rename not found in candidate")

    return Detector(
        id=id,
        name=name,
        complexity=complexity,
        description=description,
        subject=subject or f"{old_label} removal",
        applies=lambda golden: removes(golden, old),
        evaluate=evaluate,
    )


def removal_detector(
    *,
    id: str,
    name: str,
    description: str,
    pattern: LinePredicate,
    label: str,
    complexity: Complexity = "trivial",
    subject: Optional[str] = None,
) -> Detector:
    def evaluate(golden: ChangeRecord, candidate: ChangeRecord) -> Verdict:
        if removes(candidate, pattern):
            if adds(candidate, pattern):
                return incorrect(f"{label} was removed but re-added in candidate")
            return correct(f"{label} correctly removed")
        return missing(f"{label} removal not found in candidate")

    return Detector(
        id=id,
        name=name,
        complexity=complexity,
        description=description,
        subject=subject or f"{label} removal",
        applies=lambda golden: removes(golden, pattern),
        evaluate=evaluate,
    )


def replacement_detector(
    *,
    id: str,
    name: str,
    description: str,
    old: LinePredicate,
    new: LinePredicate,
    old_label: str,
    new_label: str,
    complexity: Complexity = "trivial",
    subject: Optional[str] = None,
) -> Detector:
    def evaluate(golden: ChangeRecord, candidate: ChangeRecord) -> Verdict:
        removes_old = removes(candidate, old)
        adds_new = adds(candidate, new)
        if removes_old and adds_new:
            return correct(f"{old_label} correctly replaced with {new_label}")
        if adds_new:
            return correct(f"{new_label} added in candidate")
        if not removes_old:
            return missing(f"{old_label} -> {new_label} replacement not found in candidate")
        return incorrect(f"{old_label} removed but {new_label} replacements not added")

    return Detector(
        id=id,
        name=name,
        complexity=complexity,
        description=description,
        subject=subject or f"{old_label} -> {new_label} changes",
        applies=lambda golden: removes(golden, old) or adds(golden, new),
        evaluate=evaluate,
    )
