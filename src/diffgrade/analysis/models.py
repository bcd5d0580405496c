"""Data models for file matching and structured views."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

from diffgrade.git.models import ChangeRecord


# ---- matching ----


@dataclass(frozen=True)
class MatchedPair:
    path: str  # normalized
    golden: ChangeRecord
    candidate: ChangeRecord


@dataclass(frozen=True)
class MatchResult:
    """Golden/candidate records partitioned by normalized path."""

    matched: Tuple[MatchedPair, ...] = ()
    missed: Tuple[ChangeRecord, ...] = ()  # golden only
    extra: Tuple[ChangeRecord, ...] = ()  # candidate only


# ---- structured views ----


@dataclass(frozen=True, slots=True)
class Attribute:
    name: str
    value: Optional[str] = None  # None for bare boolean attributes


@dataclass(frozen=True, slots=True)
class ImportDecl:
    module: str
    names: Tuple[str, ...] = ()
    default: Optional[str] = None


@dataclass(frozen=True, slots=True)
class TagUsage:
    tag: str
    attributes: Tuple[Attribute, ...] = ()
    children: Tuple[str, ...] = ()

    def attribute(self, name: str) -> Optional[Attribute]:
        for attr in self.attributes:
            if attr.name == name:
                return attr
        return None

    def has_attribute(self, name: str) -> bool:
        return self.attribute(name) is not None


@dataclass(frozen=True)
class StructuredView:
    """Best-effort view of the imports and JSX tags in one source file."""

    path: str
    imports: Tuple[ImportDecl, ...] = ()
    tags: Tuple[TagUsage, ...] = ()
    parse_errors: Tuple[str, ...] = ()

    def tags_named(self, name: str) -> List[TagUsage]:
        return [t for t in self.tags if t.tag == name]

    def has_tag(self, name: str) -> bool:
        return any(t.tag == name for t in self.tags)

    def imports_from(self, module: str) -> List[ImportDecl]:
        return [i for i in self.imports if i.module == module]
