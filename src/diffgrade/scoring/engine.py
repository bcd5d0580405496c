"""Scoring engine — file coverage, weighted pattern score, and noise penalty.

    overall = 0.20 * file_coverage + 0.65 * pattern_score + 0.15 * (1 - noise_penalty)

Each component is computed on the 0–1 scale; the breakdown reports all four
values on 0–100, rounded half-up to two decimals.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Sequence

from diffgrade.analysis.models import MatchResult
from diffgrade.detectors.models import DetectionStatus, FileDetection
from diffgrade.scoring.models import NoiseInstance, ScoreBreakdown

COVERAGE_WEIGHT = 0.20
PATTERN_WEIGHT = 0.65
NOISE_WEIGHT = 0.15

GRADE_THRESHOLDS: tuple[tuple[float, str], ...] = (
    (90.0, "A"),
    (80.0, "B"),
    (70.0, "C"),
    (60.0, "D"),
)


def compute_file_coverage(match: MatchResult) -> float:
    """Matched pairs over golden files; 1.0 when there are no golden files."""
    total = len(match.matched) + len(match.missed)
    if total == 0:
        return 1.0
    return len(match.matched) / total


def compute_pattern_score(detections: Iterable[FileDetection]) -> float:
    """Weighted credit over weighted expectation, NOT_APPLICABLE excluded."""
    earned = 0.0
    expected = 0.0
    for fd in detections:
        status = fd.detection.status
        if status is DetectionStatus.NOT_APPLICABLE:
            continue
        earned += fd.weight * (status.credit or 0.0)
        expected += fd.weight
    if expected == 0:
        return 1.0
    return earned / expected


def compute_noise_penalty(noise: Sequence[NoiseInstance]) -> float:
    return min(1.0, sum(n.penalty for n in noise))


def _percent(value: float) -> float:
    return float(Decimal(repr(value * 100)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def compute_score(
    match: MatchResult,
    detections: Sequence[FileDetection],
    noise: Sequence[NoiseInstance],
) -> ScoreBreakdown:
    coverage = compute_file_coverage(match)
    pattern = compute_pattern_score(detections)
    penalty = compute_noise_penalty(noise)
    overall = COVERAGE_WEIGHT * coverage + PATTERN_WEIGHT * pattern + NOISE_WEIGHT * (1 - penalty)
    return ScoreBreakdown(
        overall=_percent(overall),
        file_coverage=_percent(coverage),
        pattern_score=_percent(pattern),
        noise_penalty=_percent(penalty),
    )


def grade(score: float) -> str:
    """Letter grade for an overall score on the 0–100 scale."""
    for threshold, letter in GRADE_THRESHOLDS:
        if score >= threshold:
            return letter
    return "F"
