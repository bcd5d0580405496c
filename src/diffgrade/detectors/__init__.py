"""Detector contract, shape factories and the registry."""

from diffgrade.detectors.models import (
    TIER_ORDER,
    TIER_WEIGHTS,
    Complexity,
    Detection,
    DetectionStatus,
    Detector,
    FileDetection,
    Verdict,
)
from diffgrade.detectors.registry import (
    DetectorDefinitionError,
    DetectorRegistry,
    build_registry,
)

__all__ = [
    "Complexity",
    "Detection",
    "DetectionStatus",
    "Detector",
    "DetectorDefinitionError",
    "DetectorRegistry",
    "FileDetection",
    "TIER_ORDER",
    "TIER_WEIGHTS",
    "Verdict",
    "build_registry",
]
