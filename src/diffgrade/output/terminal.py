"""Rich terminal reporter — score summary and per-tier status counts."""

from __future__ import annotations

from collections import Counter
from typing import Optional

from rich.console import Console
from rich.table import Table
from rich.text import Text

from diffgrade.detectors.models import TIER_ORDER, TIER_WEIGHTS, DetectionStatus
from diffgrade.evaluator.models import EvaluationResult
from diffgrade.scoring.engine import grade

_GRADE_STYLE = {
    "A": "bold white on green",
    "B": "bold black on bright_green",
    "C": "bold black on yellow",
    "D": "bold white on dark_orange",
    "F": "bold white on red",
}

_STATUS_COLUMNS = (
    (DetectionStatus.CORRECT, "green"),
    (DetectionStatus.INCORRECT, "yellow"),
    (DetectionStatus.MISSING, "red"),
    (DetectionStatus.FILE_MISSING, "magenta"),
)


def _grade_pill(score: float) -> Text:
    letter = grade(score)
    return Text(f" {score}% ({letter}) ", style=_GRADE_STYLE.get(letter, ""))


def render(
    result: EvaluationResult,
    *,
    console: Optional[Console] = None,
    show_summary: bool = True,
) -> None:
    """Print the evaluation summary to the terminal using Rich."""
    console = console or Console(stderr=True)
    score = result.score

    console.print()
    console.print("[bold]Evaluation Summary[/bold]  ", _grade_pill(score.overall))

    table = Table(title="Pattern Results by Tier", title_style="bold", border_style="dim")
    table.add_column("Tier", style="cyan")
    for status, style in _STATUS_COLUMNS:
        table.add_column(status.value, justify="right", style=style)

    weights = {weight: tier for tier, weight in TIER_WEIGHTS.items()}
    counts: Counter[tuple[str, DetectionStatus]] = Counter(
        (weights.get(fd.weight, "unknown"), fd.detection.status) for fd in result.detections
    )
    for tier in TIER_ORDER:
        table.add_row(tier, *(str(counts[(tier, status)]) for status, _ in _STATUS_COLUMNS))
    console.print(table)

    if show_summary:
        _print_summary(console, result)


def _print_summary(console: Console, result: EvaluationResult) -> None:
    score = result.score
    match = result.match
    console.print()
    console.print(f"[dim]File coverage:[/dim]  {score.file_coverage}%")
    console.print(f"[dim]Pattern score:[/dim]  {score.pattern_score}%")
    console.print(f"[dim]Noise penalty:[/dim]  {score.noise_penalty}%")
    console.print(
        f"[dim]Files:[/dim]          {len(match.matched)} matched, "
        f"{len(match.missed)} missed, {len(match.extra)} extra"
    )
    console.print(f"[dim]Noise:[/dim]          {len(result.noise)} instance(s)")
