"""Evaluation driver — match, detect, scan noise, score."""

from __future__ import annotations

import logging
from typing import Dict, List, Mapping, Optional, Sequence

from diffgrade.analysis.matcher import match_files, normalize_path
from diffgrade.analysis.models import StructuredView
from diffgrade.analysis.structure import view_for
from diffgrade.detectors.models import Detector, FileDetection
from diffgrade.detectors.registry import DetectorRegistry
from diffgrade.evaluator.models import EvaluationResult, FileResult
from diffgrade.git.models import ChangeRecord
from diffgrade.scoring.engine import compute_score
from diffgrade.scoring.noise import scan_noise

logger = logging.getLogger(__name__)


def _view(
    record: ChangeRecord,
    sources: Optional[Mapping[str, str]],
    enabled: bool,
) -> Optional[StructuredView]:
    if not enabled:
        return None
    source = sources.get(record.path) if sources else None
    return view_for(record, source)


def _run_detectors(
    detectors: Sequence[Detector],
    path: str,
    golden: ChangeRecord,
    candidate: Optional[ChangeRecord],
    golden_view: Optional[StructuredView],
    candidate_view: Optional[StructuredView],
) -> List[FileDetection]:
    found: List[FileDetection] = []
    for detector in detectors:
        detection = detector.detect(golden, candidate, golden_view, candidate_view)
        logger.debug(
            "[%s] %s: %s - %s", path, detector.id, detection.status.value, detection.message
        )
        found.append(FileDetection(path=path, detection=detection, weight=detector.weight))
    return found


def evaluate(
    golden: Sequence[ChangeRecord],
    candidate: Sequence[ChangeRecord],
    registry: DetectorRegistry,
    *,
    golden_sources: Optional[Mapping[str, str]] = None,
    candidate_sources: Optional[Mapping[str, str]] = None,
    use_structure: bool = True,
) -> EvaluationResult:
    """Grade *candidate* against *golden* with the enabled detectors of *registry*.

    ``golden_sources`` / ``candidate_sources`` map record paths to full file
    contents; when a file is absent its structured view is reconstructed from
    the record's added lines.
    """
    match = match_files(golden, candidate)
    logger.info(
        "Matched: %d, Missed: %d, Extra: %d",
        len(match.matched),
        len(match.missed),
        len(match.extra),
    )

    detectors = registry.enabled_detectors()
    logger.info("Running %d detector(s)", len(detectors))

    detections: List[FileDetection] = []
    file_results: List[FileResult] = []

    for pair in match.matched:
        found = _run_detectors(
            detectors,
            pair.path,
            pair.golden,
            pair.candidate,
            _view(pair.golden, golden_sources, use_structure),
            _view(pair.candidate, candidate_sources, use_structure),
        )
        detections.extend(found)
        file_results.append(
            FileResult(path=pair.path, status="matched", detections=[f.detection for f in found])
        )

    for record in match.missed:
        path = normalize_path(record.path)
        found = _run_detectors(
            detectors,
            path,
            record,
            None,
            _view(record, golden_sources, use_structure),
            None,
        )
        detections.extend(found)
        file_results.append(
            FileResult(path=path, status="missed", detections=[f.detection for f in found])
        )

    noise = scan_noise(match, candidate, detections)
    by_path: Dict[str, FileResult] = {fr.path: fr for fr in file_results}
    for instance in noise:
        fr = by_path.get(normalize_path(instance.file))
        if fr is not None:
            fr.noise.append(instance)
    logger.info("Noise instances: %d", len(noise))

    score = compute_score(match, detections, noise)
    return EvaluationResult(
        match=match,
        file_results=file_results,
        detections=tuple(detections),
        noise=tuple(noise),
        score=score,
    )
