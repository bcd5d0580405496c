"""Detector registry — loads built-in and custom detectors, applies config filters."""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Set

import yaml

from diffgrade.config.schema import DiffgradeConfig
from diffgrade.detectors.models import TIER_ORDER, Detector
from diffgrade.detectors.shapes import (
    any_of,
    removal_detector,
    rename_detector,
    replacement_detector,
)

logger = logging.getLogger(__name__)

_SHAPES = ("rename", "removal", "replacement")


class DetectorDefinitionError(Exception):
    """Raised for a malformed custom detector or a duplicate detector id."""


class DetectorRegistry:
    """Explicit catalog of detectors, in registration order."""

    def __init__(self) -> None:
        self._detectors: Dict[str, Detector] = {}
        self._disabled: Set[str] = set()

    # ---- registration ----

    def register(self, detector: Detector) -> None:
        if detector.id in self._detectors:
            raise DetectorDefinitionError(f"Duplicate detector id: {detector.id}")
        self._detectors[detector.id] = detector

    def register_many(self, detectors: Iterable[Detector]) -> None:
        for d in detectors:
            self.register(d)

    def clear(self) -> None:
        self._detectors.clear()
        self._disabled.clear()

    # ---- queries ----

    def __len__(self) -> int:
        return len(self._detectors)

    def __contains__(self, detector_id: object) -> bool:
        return detector_id in self._detectors

    @property
    def all_detectors(self) -> List[Detector]:
        return list(self._detectors.values())

    def get(self, detector_id: str) -> Optional[Detector]:
        return self._detectors.get(detector_id)

    def by_complexity(self, complexity: str) -> List[Detector]:
        return [d for d in self._detectors.values() if d.complexity == complexity]

    def is_enabled(self, detector_id: str) -> bool:
        return detector_id in self._detectors and detector_id not in self._disabled

    def enabled_detectors(self) -> List[Detector]:
        return [d for d in self._detectors.values() if d.id not in self._disabled]

    # ---- config filtering ----

    def apply_config(self, config: DiffgradeConfig) -> None:
        """Enable / disable detectors based on the [detectors] section."""
        enable_list = config.detectors.enable
        disable_list = config.detectors.disable

        for ident in [*enable_list, *disable_list]:
            if ident not in self._detectors:
                logger.warning("Config names unknown detector %r", ident)

        self._disabled.clear()
        for detector in self._detectors.values():
            # An explicit enable-list restricts the catalog to its members
            if enable_list and detector.id not in enable_list:
                self._disabled.add(detector.id)
            if detector.id in disable_list:
                self._disabled.add(detector.id)

    # ---- custom detector loading ----

    def load_custom_detectors(self, directory: Path) -> int:
        """Load YAML detector definitions from *directory*. Returns count loaded."""
        count = 0
        if not directory.is_dir():
            return 0
        for path in sorted(directory.iterdir()):
            if path.suffix in (".yaml", ".yml"):
                count += self._load_yaml_detectors(path)
        if count:
            logger.info("Loaded %d custom detector(s) from %s", count, directory)
        return count

    def _load_yaml_detectors(self, path: Path) -> int:
        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as exc:
            raise DetectorDefinitionError(f"Failed to read {path}: {exc}") from exc
        if data is None:
            return 0
        if not isinstance(data, list):
            data = [data]
        count = 0
        for entry in data:
            self.register(_detector_from_entry(entry, path))
            count += 1
        return count


def _patterns(entry: Dict[str, Any], key: str, path: Path) -> List[str]:
    value = entry.get(key)
    if isinstance(value, str):
        value = [value]
    if not value or not all(isinstance(v, str) for v in value):
        raise DetectorDefinitionError(
            f"{path}: detector {entry.get('id')!r} needs '{key}' as a regex or list of regexes"
        )
    return value


def _detector_from_entry(entry: Any, path: Path) -> Detector:
    """Build a shape detector from one YAML mapping."""
    if not isinstance(entry, dict) or "id" not in entry:
        raise DetectorDefinitionError(f"{path}: every detector needs an 'id'")

    shape = entry.get("shape", "rename")
    if shape not in _SHAPES:
        raise DetectorDefinitionError(
            f"{path}: detector {entry['id']!r} has unknown shape {shape!r}"
        )
    complexity = entry.get("complexity", "trivial")
    if complexity not in TIER_ORDER:
        raise DetectorDefinitionError(
            f"{path}: detector {entry['id']!r} has unknown complexity {complexity!r}"
        )

    common = dict(
        id=str(entry["id"]),
        name=entry.get("name", entry["id"]),
        description=entry.get("description", ""),
        complexity=complexity,
        subject=entry.get("subject"),
    )

    try:
        if shape == "removal":
            pattern = _patterns(entry, "pattern", path)
            return removal_detector(
                pattern=any_of(*pattern),
                label=entry.get("label", pattern[0]),
                **common,
            )

        old = _patterns(entry, "old", path)
        new = _patterns(entry, "new", path)
        factory = rename_detector if shape == "rename" else replacement_detector
        return factory(
            old=any_of(*old),
            new=any_of(*new),
            old_label=entry.get("old_label", old[0]),
            new_label=entry.get("new_label", new[0]),
            **common,
        )
    except re.error as exc:
        raise DetectorDefinitionError(
            f"{path}: detector {entry['id']!r} has an invalid regex: {exc}"
        ) from exc


def build_registry(
    config: Optional[DiffgradeConfig] = None,
    base_dir: Optional[Path] = None,
) -> DetectorRegistry:
    """Create a fully populated, config-filtered detector registry."""
    from diffgrade.detectors.builtin import ALL_BUILTIN_DETECTORS

    config = config or DiffgradeConfig()
    registry = DetectorRegistry()
    registry.register_many(ALL_BUILTIN_DETECTORS)

    # Custom detectors from .diffgrade-detectors/
    if base_dir is not None:
        registry.load_custom_detectors(base_dir / config.detectors.custom_dir)

    registry.apply_config(config)
    logger.debug(
        "Registry ready: %d detector(s), %d enabled",
        len(registry),
        len(registry.enabled_detectors()),
    )
    return registry
