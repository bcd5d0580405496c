"""Configuration schema — dataclasses for every config section."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Literal, Optional

ReportFormat = Literal["json", "markdown"]

REPORT_FORMATS: tuple[str, ...] = ("json", "markdown")


@dataclass
class OutputConfig:
    dir: str = "./results"
    formats: List[str] = field(default_factory=lambda: list(REPORT_FORMATS))
    show_summary: bool = True


@dataclass
class DetectorsConfig:
    enable: List[str] = field(default_factory=list)  # empty = all enabled
    disable: List[str] = field(default_factory=list)
    custom_dir: str = ".diffgrade-detectors"


@dataclass
class StructureConfig:
    enabled: bool = True


@dataclass
class ScoringConfig:
    min_score: Optional[float] = None  # gate: exit 1 below this overall score


@dataclass
class DiffgradeConfig:
    version: str = "1.0"
    output: OutputConfig = field(default_factory=OutputConfig)
    detectors: DetectorsConfig = field(default_factory=DetectorsConfig)
    structure: StructureConfig = field(default_factory=StructureConfig)
    scoring: ScoringConfig = field(default_factory=ScoringConfig)
