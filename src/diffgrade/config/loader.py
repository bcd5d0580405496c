"""Load and merge configuration from .diffgrade.toml and env vars."""

from __future__ import annotations

import dataclasses
import logging
import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from diffgrade.config.schema import (
    REPORT_FORMATS,
    DetectorsConfig,
    DiffgradeConfig,
    OutputConfig,
    ScoringConfig,
    StructureConfig,
)

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".diffgrade.toml"


class ConfigError(Exception):
    """Raised when config is malformed or unreadable."""


def find_config_file(base_dir: Path, override: Optional[str] = None) -> Optional[Path]:
    """Locate the config file. *override* takes precedence."""
    if override:
        p = Path(override)
        if not p.is_file():
            raise ConfigError(f"Config file not found: {override}")
        return p
    candidate = base_dir / CONFIG_FILENAME
    return candidate if candidate.is_file() else None


def _parse_toml(path: Path) -> Dict[str, Any]:
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ConfigError(f"Failed to parse {path}: {exc}") from exc


def _split_list(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


def _merge_env_overrides(cfg: DiffgradeConfig) -> None:
    """Apply DIFFGRADE_* environment variable overrides."""
    if val := os.environ.get("DIFFGRADE_OUTPUT_DIR"):
        cfg.output.dir = val
    if val := os.environ.get("DIFFGRADE_FORMATS"):
        formats = [f for f in _split_list(val) if f in REPORT_FORMATS]
        if formats:
            cfg.output.formats = formats
    if val := os.environ.get("DIFFGRADE_DISABLE_DETECTORS"):
        cfg.detectors.disable.extend(_split_list(val))
    if val := os.environ.get("DIFFGRADE_MIN_SCORE"):
        try:
            cfg.scoring.min_score = float(val)
        except ValueError:
            logger.warning("Ignoring invalid DIFFGRADE_MIN_SCORE=%r", val)


def _build_section(data: Dict[str, Any], cls: type, section: str):
    """Build a dataclass from a TOML section dict, ignoring unknown keys."""
    raw = data.get(section, {})
    if not isinstance(raw, dict):
        raise ConfigError(f"[{section}] must be a table")
    valid_fields = {f.name for f in dataclasses.fields(cls)}
    filtered = {k: v for k, v in raw.items() if k in valid_fields}
    return cls(**filtered)


def _validate(cfg: DiffgradeConfig) -> None:
    unknown = [f for f in cfg.output.formats if f not in REPORT_FORMATS]
    if unknown:
        raise ConfigError(
            f"Unknown report format(s): {', '.join(unknown)} "
            f"(expected {', '.join(REPORT_FORMATS)})"
        )
    min_score = cfg.scoring.min_score
    if min_score is not None and not 0 <= min_score <= 100:
        raise ConfigError(f"scoring.min_score must be between 0 and 100, got {min_score}")


def load_config(
    base_dir: Path,
    config_override: Optional[str] = None,
) -> DiffgradeConfig:
    """Load, validate, and return a DiffgradeConfig."""
    config_path = find_config_file(base_dir, config_override)

    if config_path is None:
        cfg = DiffgradeConfig()
    else:
        logger.debug("Loading config from %s", config_path)
        raw = _parse_toml(config_path)
        cfg = DiffgradeConfig(
            version=str(raw.get("version", "1.0")),
            output=_build_section(raw, OutputConfig, "output"),
            detectors=_build_section(raw, DetectorsConfig, "detectors"),
            structure=_build_section(raw, StructureConfig, "structure"),
            scoring=_build_section(raw, ScoringConfig, "scoring"),
        )

    _merge_env_overrides(cfg)
    _validate(cfg)
    return cfg
