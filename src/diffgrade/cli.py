"""diffgrade CLI — Typer application with evaluate, detectors, and init commands."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple

import typer
from rich.console import Console
from rich.table import Table

from diffgrade import __version__

app = typer.Typer(
    name="diffgrade",
    help="Grade a candidate code change against a golden reference change.",
    add_completion=False,
    no_args_is_help=True,
)

console = Console(stderr=True)


def _load_config(config: Optional[str]):
    """Load config from the working directory, exit 2 on failure."""
    from diffgrade.config.loader import ConfigError, load_config

    try:
        return load_config(Path.cwd(), config)
    except ConfigError as exc:
        console.print(f"[bold red]Config error:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc


def _build_registry(cfg):
    from diffgrade.detectors.registry import DetectorDefinitionError, build_registry

    try:
        return build_registry(cfg, Path.cwd())
    except DetectorDefinitionError as exc:
        console.print(f"[bold red]Detector error:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc


def _parse_formats(value: str) -> List[str]:
    from diffgrade.config.schema import REPORT_FORMATS

    formats = [f.strip() for f in value.split(",") if f.strip()]
    invalid = [f for f in formats if f not in REPORT_FORMATS]
    if invalid or not formats:
        console.print(f"[bold red]Invalid format:[/bold red] {value}")
        raise typer.Exit(code=2)
    return formats


def _read_pr_pair(golden_pr: str, candidate_pr: str) -> Tuple[str, str]:
    from diffgrade.git.github import fetch_pr_diff, validate_gh_cli, validate_pr_url

    validate_pr_url(golden_pr)
    validate_pr_url(candidate_pr)
    validate_gh_cli()
    return fetch_pr_diff(golden_pr), fetch_pr_diff(candidate_pr)


def _sources(directory: Path, records: Sequence) -> Dict[str, str]:
    from diffgrade.git.adapter import read_file_contents

    return read_file_contents(directory, [r.path for r in records if not r.is_binary])


# ── evaluate ──────────────────────────────────────────────────────────────────


@app.command()
def evaluate(
    golden_pr: Optional[str] = typer.Option(None, "--golden-pr", help="GitHub PR URL of the golden change"),
    candidate_pr: Optional[str] = typer.Option(
        None, "--candidate-pr", "--migration-pr", help="GitHub PR URL of the candidate change"
    ),
    golden_dir: Optional[Path] = typer.Option(None, "--golden-dir", help="Local checkout of the golden change"),
    candidate_dir: Optional[Path] = typer.Option(
        None, "--candidate-dir", "--migration-dir", help="Local checkout of the candidate change"
    ),
    output_dir: Optional[Path] = typer.Option(None, "--output-dir", "-o", help="Directory for reports"),
    format: Optional[str] = typer.Option(None, "--format", "-f", help="Report formats: json,markdown"),
    min_score: Optional[float] = typer.Option(
        None, "--min-score", min=0, max=100, help="Exit 1 below this overall score (0-100)"
    ),
    structure: Optional[bool] = typer.Option(
        None, "--structure/--no-structure", help="Build structured views of JS/TS sources"
    ),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to .diffgrade.toml"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log every detection"),
) -> None:
    """Evaluate a candidate change against a golden change and write reports."""
    from diffgrade.evaluator.engine import evaluate as run_evaluation
    from diffgrade.git.adapter import GitError, get_branch_diff
    from diffgrade.git.diff_parser import parse_diff
    from diffgrade.git.github import GitHubError
    from diffgrade.log import configure_logging
    from diffgrade.output import ReportMetadata, json_report, markdown_report, terminal

    logger = configure_logging(verbose, console)

    has_pr_pair = bool(golden_pr and candidate_pr)
    has_dir_pair = bool(golden_dir and candidate_dir)
    if has_pr_pair == has_dir_pair:
        console.print(
            "[bold red]Error:[/bold red] Provide either --golden-pr and --candidate-pr, "
            "or --golden-dir and --candidate-dir."
        )
        raise typer.Exit(code=2)

    # --- Load config ---
    cfg = _load_config(config)
    if output_dir is not None:
        cfg.output.dir = str(output_dir)
    if format:
        cfg.output.formats = _parse_formats(format)
    if min_score is not None:
        cfg.scoring.min_score = min_score
    if structure is not None:
        cfg.structure.enabled = structure

    registry = _build_registry(cfg)
    logger.info("Loaded %d detector(s)", len(registry.enabled_detectors()))

    # --- Fetch diffs ---
    golden_sources: Optional[Dict[str, str]] = None
    candidate_sources: Optional[Dict[str, str]] = None
    try:
        if has_pr_pair:
            assert golden_pr is not None and candidate_pr is not None
            logger.info("Fetching golden PR %s and candidate PR %s", golden_pr, candidate_pr)
            golden_text, candidate_text = _read_pr_pair(golden_pr, candidate_pr)
            golden_label, candidate_label = golden_pr, candidate_pr
        else:
            assert golden_dir is not None and candidate_dir is not None
            logger.info("Reading golden diff from %s", golden_dir)
            golden_text = get_branch_diff(golden_dir)
            logger.info("Reading candidate diff from %s", candidate_dir)
            candidate_text = get_branch_diff(candidate_dir)
            golden_label, candidate_label = str(golden_dir), str(candidate_dir)
    except (GitError, GitHubError) as exc:
        console.print(f"[bold red]Error:[/bold red] {exc}")
        raise typer.Exit(code=1) from exc

    golden = parse_diff(golden_text)
    candidate = parse_diff(candidate_text)
    logger.info("Golden: %d file(s), Candidate: %d file(s)", len(golden), len(candidate))

    if has_dir_pair and cfg.structure.enabled:
        assert golden_dir is not None and candidate_dir is not None
        golden_sources = _sources(golden_dir, golden)
        candidate_sources = _sources(candidate_dir, candidate)

    # --- Evaluate ---
    result = run_evaluation(
        golden,
        candidate,
        registry,
        golden_sources=golden_sources,
        candidate_sources=candidate_sources,
        use_structure=cfg.structure.enabled,
    )

    # --- Reports ---
    metadata = ReportMetadata.now(golden_label, candidate_label)
    out = Path(cfg.output.dir)
    writers = {"json": json_report.write, "markdown": markdown_report.write}
    try:
        for fmt in cfg.output.formats:
            path = writers[fmt](result, metadata, out)
            console.print(f"[green]✓[/green] {fmt} report: {path}")
    except OSError as exc:
        console.print(f"[bold red]Error:[/bold red] Failed to write report: {exc}")
        raise typer.Exit(code=1) from exc

    terminal.render(result, console=console, show_summary=cfg.output.show_summary)

    # --- Exit code ---
    threshold = cfg.scoring.min_score
    if threshold is not None and result.score.overall < threshold:
        console.print(
            f"[bold red]❌ Score {result.score.overall}% is below the minimum of {threshold}%[/bold red]"
        )
        raise typer.Exit(code=1)


# ── detectors ─────────────────────────────────────────────────────────────────


@app.command()
def detectors(
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to .diffgrade.toml"),
) -> None:
    """List the detector catalog with tier, weight, and enabled state."""
    cfg = _load_config(config)
    registry = _build_registry(cfg)

    table = Table(title="Detectors", title_style="bold", border_style="dim")
    table.add_column("ID", style="cyan", min_width=20)
    table.add_column("Tier")
    table.add_column("Weight", justify="right", style="green")
    table.add_column("Enabled", justify="center")
    table.add_column("Name", style="magenta")

    for detector in registry.all_detectors:
        enabled = "[green]yes[/green]" if registry.is_enabled(detector.id) else "[dim]no[/dim]"
        table.add_row(detector.id, detector.complexity, str(detector.weight), enabled, detector.name)

    Console().print(table)


# ── init ──────────────────────────────────────────────────────────────────────


@app.command()
def init() -> None:
    """Generate a starter .diffgrade.toml in the working directory."""
    from diffgrade.config.defaults import DEFAULT_TOML
    from diffgrade.config.loader import CONFIG_FILENAME

    config_path = Path.cwd() / CONFIG_FILENAME

    if config_path.exists():
        console.print(f"[yellow]⚠[/yellow]  {CONFIG_FILENAME} already exists at {config_path}")
        raise typer.Exit(code=1)

    config_path.write_text(DEFAULT_TOML, encoding="utf-8")
    console.print(f"[green]✓[/green] Created {config_path}")


# ── version ───────────────────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        print(f"diffgrade {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False, "--version", "-V", callback=_version_callback,
        is_eager=True, help="Show version and exit",
    ),
) -> None:
    """diffgrade — grade a candidate change against a golden reference."""
