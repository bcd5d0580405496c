"""Evaluation results — per-file groupings and the overall outcome."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Literal, Tuple

from diffgrade.analysis.models import MatchResult
from diffgrade.detectors.models import Detection, DetectionStatus, FileDetection
from diffgrade.scoring.models import NoiseInstance, ScoreBreakdown

FileStatus = Literal["matched", "missed"]

_ISSUES = frozenset(
    {DetectionStatus.MISSING, DetectionStatus.INCORRECT, DetectionStatus.FILE_MISSING}
)


@dataclass
class FileResult:
    """Detections and noise for one golden file."""

    path: str
    status: FileStatus
    detections: List[Detection] = field(default_factory=list)
    noise: List[NoiseInstance] = field(default_factory=list)

    @property
    def has_issues(self) -> bool:
        return any(d.status in _ISSUES for d in self.detections)


@dataclass
class EvaluationResult:
    match: MatchResult
    file_results: List[FileResult]
    detections: Tuple[FileDetection, ...]
    noise: Tuple[NoiseInstance, ...]
    score: ScoreBreakdown

    # ---- convenience ----

    def by_status(self, status: DetectionStatus) -> List[FileDetection]:
        return [fd for fd in self.detections if fd.detection.status is status]

    def graded(self) -> List[FileDetection]:
        """Every detection that counts toward the pattern score."""
        return [
            fd for fd in self.detections
            if fd.detection.status is not DetectionStatus.NOT_APPLICABLE
        ]
