"""JSON reporter — machine-readable evaluation report."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List

from diffgrade import __version__
from diffgrade.detectors.models import Detection
from diffgrade.evaluator.models import EvaluationResult
from diffgrade.output import ReportMetadata, report_filename, write_text
from diffgrade.scoring.engine import grade
from diffgrade.scoring.models import NoiseInstance


def _detection(d: Detection) -> Dict[str, Any]:
    return {
        "detector": d.detector_id,
        "status": d.status.value,
        "message": d.message,
        **({"details": list(d.details)} if d.details else {}),
    }


def _noise(n: NoiseInstance) -> Dict[str, Any]:
    return {
        "category": n.category,
        "file": n.file,
        **({"line": n.line} if n.line is not None else {}),
        "description": n.description,
        "penalty": n.penalty,
    }


def to_dict(result: EvaluationResult, metadata: ReportMetadata) -> Dict[str, Any]:
    """Convert an EvaluationResult to a JSON-serialisable dict."""
    score = result.score

    file_results: List[Dict[str, Any]] = []
    for fr in result.file_results:
        file_results.append({
            "path": fr.path,
            "status": fr.status,
            "detections": [_detection(d) for d in fr.detections],
            "noise": [_noise(n) for n in fr.noise],
        })

    pattern_breakdown: List[Dict[str, Any]] = []
    for fd in result.detections:
        pattern_breakdown.append({
            "path": fd.path,
            "weight": fd.weight,
            **_detection(fd.detection),
        })

    return {
        "version": "1.0",
        "metadata": {
            "timestamp": metadata.timestamp,
            "golden_source": metadata.golden_source,
            "candidate_source": metadata.candidate_source,
            "tool_version": __version__,
        },
        "summary": {
            "overall_score": score.overall,
            "grade": grade(score.overall),
            "file_coverage": score.file_coverage,
            "pattern_score": score.pattern_score,
            "noise_penalty": score.noise_penalty,
        },
        "match": {
            "matched": [pair.path for pair in result.match.matched],
            "missed": [r.path for r in result.match.missed],
            "extra": [r.path for r in result.match.extra],
        },
        "file_results": file_results,
        "pattern_breakdown": pattern_breakdown,
        "noise_instances": [_noise(n) for n in result.noise],
    }


def render(result: EvaluationResult, metadata: ReportMetadata) -> str:
    """Return formatted JSON string."""
    return json.dumps(to_dict(result, metadata), indent=2)


def write(result: EvaluationResult, metadata: ReportMetadata, output_dir: Path) -> Path:
    """Write the report into *output_dir* and return its path."""
    return write_text(
        output_dir,
        report_filename(metadata.timestamp, "json"),
        render(result, metadata) + "\n",
    )
