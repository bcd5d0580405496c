"""Noise instances and the score breakdown."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional

NoiseCategory = Literal[
    "unnecessary_change",
    "formatting_only",
    "incorrect_migration",
    "artifact",
    "placeholder_token",
]

NOISE_PENALTIES: dict[str, float] = {
    "unnecessary_change": 0.01,
    "formatting_only": 0.02,
    "incorrect_migration": 0.03,
    "artifact": 0.05,
    "placeholder_token": 0.05,
}


@dataclass(frozen=True, slots=True)
class NoiseInstance:
    """One penalized artifact of the candidate."""

    category: NoiseCategory
    file: str
    description: str
    penalty: float
    line: Optional[int] = None


@dataclass(frozen=True, slots=True)
class ScoreBreakdown:
    """All four values on a 0–100 scale, rounded to two decimals."""

    overall: float
    file_coverage: float
    pattern_score: float
    noise_penalty: float
