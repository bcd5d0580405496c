"""Noise scanning and scoring."""

from diffgrade.scoring.engine import (
    compute_file_coverage,
    compute_noise_penalty,
    compute_pattern_score,
    compute_score,
    grade,
)
from diffgrade.scoring.models import NOISE_PENALTIES, NoiseInstance, ScoreBreakdown
from diffgrade.scoring.noise import scan_noise

__all__ = [
    "NOISE_PENALTIES",
    "NoiseInstance",
    "ScoreBreakdown",
    "compute_file_coverage",
    "compute_noise_penalty",
    "compute_pattern_score",
    "compute_score",
    "grade",
    "scan_noise",
]
