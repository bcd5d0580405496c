"""Detector data model — status enum, verdicts, and the two-stage Detector."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Literal, Optional, Tuple

from diffgrade.analysis.models import StructuredView
from diffgrade.git.models import ChangeRecord

logger = logging.getLogger(__name__)

Complexity = Literal["trivial", "moderate", "complex"]

TIER_WEIGHTS: dict[str, int] = {
    "trivial": 1,
    "moderate": 2,
    "complex": 3,
}

TIER_ORDER: tuple[str, ...] = ("trivial", "moderate", "complex")


class DetectionStatus(str, Enum):
    CORRECT = "CORRECT"
    MISSING = "MISSING"
    INCORRECT = "INCORRECT"
    UNNECESSARY = "UNNECESSARY"  # reserved; no shipped detector produces it
    FILE_MISSING = "FILE_MISSING"
    NOT_APPLICABLE = "NOT_APPLICABLE"

    @property
    def credit(self) -> Optional[float]:
        """Share of the detector's weight earned, or None if not graded."""
        return _CREDIT.get(self)


_CREDIT: dict[DetectionStatus, float] = {
    DetectionStatus.CORRECT: 1.0,
    DetectionStatus.INCORRECT: 0.25,
    DetectionStatus.MISSING: 0.0,
    DetectionStatus.FILE_MISSING: 0.0,
}


@dataclass(frozen=True, slots=True)
class Verdict:
    """What a detector stage concluded about a candidate record."""

    status: DetectionStatus
    message: str
    details: Tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class Detection:
    """Outcome of one detector on one golden/candidate pair."""

    detector_id: str
    status: DetectionStatus
    message: str
    details: Tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class FileDetection:
    """A Detection attributed to the file pair that produced it."""

    path: str
    detection: Detection
    weight: int


Applies = Callable[[ChangeRecord], bool]
TextStage = Callable[[ChangeRecord, ChangeRecord], Verdict]
StructuredStage = Callable[[StructuredView, StructuredView], Optional[Verdict]]


def correct(message: str, *details: str) -> Verdict:
    return Verdict(DetectionStatus.CORRECT, message, tuple(details))


def incorrect(message: str, *details: str) -> Verdict:
    return Verdict(DetectionStatus.INCORRECT, message, tuple(details))


def missing(message: str) -> Verdict:
    return Verdict(DetectionStatus.MISSING, message)


@dataclass(frozen=True)
class Detector:
    """A stateless check for one expected transformation.

    ``applies`` looks at the golden record only and decides whether the
    transformation was exercised at all. ``evaluate`` is the required
    text-heuristic stage. ``inspect`` is the optional structured stage: it
    runs first when both structured views are usable, and a non-None verdict
    from it is final.
    """

    id: str
    name: str
    complexity: Complexity
    description: str
    subject: str  # e.g. 'theme="dark" removal', used in stock messages
    applies: Applies
    evaluate: TextStage
    inspect: Optional[StructuredStage] = None

    @property
    def weight(self) -> int:
        return TIER_WEIGHTS[self.complexity]

    def _outcome(self, verdict: Verdict) -> Detection:
        return Detection(
            detector_id=self.id,
            status=verdict.status,
            message=verdict.message,
            details=verdict.details,
        )

    def detect(
        self,
        golden: ChangeRecord,
        candidate: Optional[ChangeRecord],
        golden_view: Optional[StructuredView] = None,
        candidate_view: Optional[StructuredView] = None,
    ) -> Detection:
        if not self.applies(golden):
            return self._outcome(
                Verdict(DetectionStatus.NOT_APPLICABLE, f"No {self.subject} in golden diff")
            )

        if candidate is None:
            return self._outcome(
                Verdict(DetectionStatus.FILE_MISSING, "Candidate file is missing")
            )

        if (
            self.inspect is not None
            and _usable(golden_view)
            and _usable(candidate_view)
        ):
            verdict = self.inspect(golden_view, candidate_view)  # type: ignore[arg-type]
            if verdict is not None:
                logger.debug("%s: structured stage concluded %s", self.id, verdict.status.value)
                return self._outcome(verdict)

        return self._outcome(self.evaluate(golden, candidate))


def _usable(view: Optional[StructuredView]) -> bool:
    return view is not None and not view.parse_errors
