"""Markdown reporter — human-readable evaluation report."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List

from diffgrade.detectors.models import TIER_ORDER, TIER_WEIGHTS, DetectionStatus, FileDetection
from diffgrade.evaluator.models import EvaluationResult
from diffgrade.output import ReportMetadata, report_filename, write_text
from diffgrade.scoring.engine import grade

_STATUS_ICON = {
    DetectionStatus.CORRECT: "✅",
    DetectionStatus.MISSING: "❌",
    DetectionStatus.INCORRECT: "⚠️",
    DetectionStatus.FILE_MISSING: "📁",
    DetectionStatus.NOT_APPLICABLE: "➖",
    DetectionStatus.UNNECESSARY: "🗑️",
}

_TIER_BY_WEIGHT = {weight: tier for tier, weight in TIER_WEIGHTS.items()}


def _cell(text: str) -> str:
    return text.replace("|", "\\|")


def _group_by_tier(detections: List[FileDetection]) -> Dict[str, List[FileDetection]]:
    groups: Dict[str, List[FileDetection]] = {tier: [] for tier in TIER_ORDER}
    for fd in detections:
        groups.setdefault(_TIER_BY_WEIGHT.get(fd.weight, "unknown"), []).append(fd)
    return groups


def _recommendations(result: EvaluationResult) -> List[str]:
    recs: List[str] = []

    missing = result.by_status(DetectionStatus.MISSING)
    if missing:
        ids = ", ".join(sorted({fd.detection.detector_id for fd in missing}))
        recs.append(f"Fix {len(missing)} missing change(s): {ids}")

    incorrect = result.by_status(DetectionStatus.INCORRECT)
    if incorrect:
        ids = ", ".join(sorted({fd.detection.detector_id for fd in incorrect}))
        recs.append(f"Review {len(incorrect)} incorrect change(s): {ids}")

    file_missing = result.by_status(DetectionStatus.FILE_MISSING)
    if file_missing:
        recs.append(
            f"Address {len(file_missing)} expected change(s) in files the candidate does not touch"
        )

    if result.score.noise_penalty > 0:
        artifacts = [n for n in result.noise if n.category == "artifact"]
        placeholders = [n for n in result.noise if n.category == "placeholder_token"]
        if artifacts:
            recs.append(f"Remove {len(artifacts)} artifact(s) (e.g. console.log, TODO comments)")
        if placeholders:
            recs.append(f"Replace {len(placeholders)} placeholder token(s) with real values")

    return recs


def render(result: EvaluationResult, metadata: ReportMetadata) -> str:
    """Return the full Markdown report."""
    score = result.score
    lines: List[str] = []

    # ── summary ─────────────────────────────────────────────────────
    lines += [
        "# Migration Evaluation Report",
        "",
        "## Executive Summary",
        "",
        "| Metric | Value |",
        "| --- | --- |",
        f"| **Overall Score** | **{score.overall}% ({grade(score.overall)})** |",
        f"| File Coverage | {score.file_coverage}% |",
        f"| Pattern Score | {score.pattern_score}% |",
        f"| Noise Penalty | {score.noise_penalty}% |",
        "",
        f"> Golden: `{metadata.golden_source}`",
        f"> Candidate: `{metadata.candidate_source}`",
        "",
    ]

    # ── files ───────────────────────────────────────────────────────
    lines += ["## File Coverage", "", "| File | Status |", "| --- | --- |"]
    if not result.file_results and not result.match.extra:
        lines.append("| _(no files)_ | - |")
    for fr in result.file_results:
        if fr.status == "missed":
            lines.append(f"| {_cell(fr.path)} | ❌ Missed |")
        else:
            icon = "⚠️" if fr.has_issues else "✅"
            lines.append(f"| {_cell(fr.path)} | {icon} Matched |")
    for record in result.match.extra:
        lines.append(f"| {_cell(record.path)} | ➕ Extra |")
    lines.append("")

    # ── patterns ────────────────────────────────────────────────────
    lines += ["## Pattern Results", ""]
    graded = result.graded()
    if not graded:
        lines += ["No applicable patterns in the golden diff.", ""]
    for tier, group in _group_by_tier(graded).items():
        if not group:
            continue
        lines += [
            f"### {tier.capitalize()} Patterns",
            "",
            "| Pattern | File | Status | Message |",
            "| --- | --- | --- | --- |",
        ]
        for fd in group:
            d = fd.detection
            icon = _STATUS_ICON.get(d.status, "❓")
            lines.append(
                f"| {d.detector_id} | {_cell(fd.path)} | {icon} {d.status.value} | {_cell(d.message)} |"
            )
        lines.append("")

    # ── noise ───────────────────────────────────────────────────────
    lines += ["## Noise Findings", ""]
    if not result.noise:
        lines.append("No noise detected.")
    else:
        lines += [f"Found {len(result.noise)} noise instance(s):", ""]
        for n in result.noise:
            loc = f"{n.file}:{n.line}" if n.line is not None else n.file
            lines.append(f"- **{n.category}** in `{loc}`: {n.description} _(penalty: {n.penalty})_")
    lines.append("")

    # ── recommendations ─────────────────────────────────────────────
    lines += ["## Recommendations", ""]
    recs = _recommendations(result)
    if not recs:
        lines.append("No issues found.")
    lines += [f"- {rec}" for rec in recs]
    lines.append("")

    return "\n".join(lines)


def write(result: EvaluationResult, metadata: ReportMetadata, output_dir: Path) -> Path:
    """Write the report into *output_dir* and return its path."""
    return write_text(output_dir, report_filename(metadata.timestamp, "md"), render(result, metadata))
