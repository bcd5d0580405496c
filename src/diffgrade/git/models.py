"""Data models for diff parsing."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True, slots=True)
class DiffLine:
    """A single added or removed line, numbered in its own side of the diff."""

    line_no: int
    content: str


@dataclass(frozen=True, slots=True)
class Hunk:
    """One ``@@`` block. ``lines`` holds the raw body lines, header excluded."""

    old_start: int
    old_count: int
    new_start: int
    new_count: int
    lines: Tuple[str, ...] = ()

    @property
    def old_end(self) -> int:
        return self.old_start + self.old_count

    @property
    def new_end(self) -> int:
        return self.new_start + self.new_count


@dataclass(frozen=True)
class ChangeRecord:
    """Everything a diff says about one file."""

    path: str
    old_path: Optional[str] = None  # set on renames and path changes
    added_lines: Tuple[DiffLine, ...] = ()
    removed_lines: Tuple[DiffLine, ...] = ()
    hunks: Tuple[Hunk, ...] = ()
    is_binary: bool = False
    is_renamed: bool = False

    @property
    def has_changes(self) -> bool:
        return bool(self.added_lines or self.removed_lines)
