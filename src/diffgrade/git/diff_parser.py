"""Unified diff parser.

Splits ``git diff`` output into per-file chunks and turns each chunk into an
immutable ChangeRecord. Handles binary markers, renames, ``/dev/null``
creation/deletion markers and hunk headers with omitted counts. A chunk the
parser cannot make sense of is dropped on its own; the rest of the diff still
parses.
"""

from __future__ import annotations

import logging
import re
from dataclasses import replace
from typing import List, NamedTuple, Optional, Tuple

from diffgrade.git.models import ChangeRecord, DiffLine, Hunk

logger = logging.getLogger(__name__)

# --- Markers ---

_BOUNDARY = "diff --git "
_HUNK_HEADER_RE = re.compile(r"^@@ -(\d+)(?:,(\d+))? \+(\d+)(?:,(\d+))? @@")
_RENAME_FROM_RE = re.compile(r"^rename from (.+)$")
_RENAME_TO_RE = re.compile(r"^rename to (.+)$")
_BINARY_FILES = "Binary files "
_BINARY_PATCH = "GIT binary patch"
_DEV_NULL = "/dev/null"
_FILE_HEADERS = ("--- ", "+++ ")


class _Cursor(NamedTuple):
    """Next old-file and new-file line numbers inside a hunk."""

    old: int
    new: int


def _strip_side_prefix(path: str) -> str:
    """Drop the ``a/`` or ``b/`` prefix git puts in front of paths."""
    if path.startswith(("a/", "b/")):
        return path[2:]
    return path


def _boundary_paths(line: str) -> Tuple[str, str]:
    """Return the (old, new) path tokens of a ``diff --git`` line.

    The split point is the first literal `` b/`` so paths containing spaces
    survive; without one we fall back to splitting on whitespace.
    """
    rest = line[len(_BOUNDARY):]
    idx = rest.find(" b/")
    if idx != -1:
        return rest[:idx], rest[idx + 1:]
    parts = rest.split()
    if not parts:
        return "", ""
    return parts[0], parts[-1]


def _marker_path(line: str) -> Optional[str]:
    """Path named by a ``---``/``+++`` marker, or None for /dev/null."""
    value = line[4:].split("\t", 1)[0].strip()
    if not value or value == _DEV_NULL:
        return None
    return _strip_side_prefix(value)


def _count(group: Optional[str]) -> int:
    return int(group) if group is not None else 1


def _split_chunks(lines: List[str]) -> List[List[str]]:
    """Group lines into one chunk per ``diff --git`` boundary."""
    chunks: List[List[str]] = []
    for line in lines:
        if line.startswith(_BOUNDARY):
            chunks.append([line])
        elif chunks:
            chunks[-1].append(line)
    return chunks


# ---- hunk bodies ----


def _in_hunk(line: str, cursor: _Cursor, header: Hunk) -> bool:
    """Decide whether *line* is part of the hunk body at *cursor*."""
    if line.startswith("\\"):
        return True
    old_open = cursor.old < header.old_end
    new_open = cursor.new < header.new_end
    if old_open or new_open:
        if line.startswith(("+", "-", " ")):
            return True
        # Some tools strip the lone space of blank context lines.
        return line == "" and old_open and new_open
    return line.startswith(("+", "-", " ")) and not line.startswith(_FILE_HEADERS)


def _step(cursor: _Cursor, line: str) -> Tuple[_Cursor, Optional[Tuple[str, DiffLine]]]:
    """Advance *cursor* over one body line.

    Returns the next cursor and, for added/removed lines, the side marker
    with the numbered entry the line produces.
    """
    if line.startswith("+"):
        return cursor._replace(new=cursor.new + 1), ("+", DiffLine(cursor.new, line[1:]))
    if line.startswith("-"):
        return cursor._replace(old=cursor.old + 1), ("-", DiffLine(cursor.old, line[1:]))
    if line.startswith("\\"):
        return cursor, None
    return _Cursor(cursor.old + 1, cursor.new + 1), None


def _read_hunk(
    header: Hunk, lines: List[str], start: int
) -> Tuple[Hunk, List[DiffLine], List[DiffLine], int]:
    """Consume the body following *header*; return the index after it."""
    cursor = _Cursor(header.old_start, header.new_start)
    body: List[str] = []
    added: List[DiffLine] = []
    removed: List[DiffLine] = []

    idx = start
    while idx < len(lines):
        line = lines[idx]
        if line.startswith("@@"):
            break
        if _in_hunk(line, cursor, header):
            body.append(line)
            cursor, entry = _step(cursor, line)
            if entry is not None:
                side, diff_line = entry
                (added if side == "+" else removed).append(diff_line)
        idx += 1

    return replace(header, lines=tuple(body)), added, removed, idx


# ---- chunks ----


def _parse_chunk(chunk: List[str]) -> Optional[ChangeRecord]:
    """Build a ChangeRecord from one chunk, or None if it is unusable."""
    old_token, new_token = _boundary_paths(chunk[0])

    first_hunk = next(
        (i for i, line in enumerate(chunk) if line.startswith("@@")), len(chunk)
    )
    header_lines = chunk[1:first_hunk]

    # --- Binary ---
    if any(
        line.startswith(_BINARY_FILES) or _BINARY_PATCH in line for line in header_lines
    ):
        path = _strip_side_prefix(new_token)
        old_path = _strip_side_prefix(old_token)
        if not path:
            return None
        return ChangeRecord(
            path=path,
            old_path=old_path if old_path != path else None,
            is_binary=True,
            is_renamed=old_path != path,
        )

    # --- Rename ---
    rename_from = rename_to = None
    for line in header_lines:
        if (rf := _RENAME_FROM_RE.match(line)):
            rename_from = rf.group(1)
        elif (rt := _RENAME_TO_RE.match(line)):
            rename_to = rt.group(1)

    if rename_from and rename_to:
        path = rename_to
        old_path = rename_from
        is_renamed = True
    else:
        # --- Textual ---
        minus_path = plus_path = None
        for line in header_lines:
            if line.startswith("--- "):
                minus_path = _marker_path(line)
            elif line.startswith("+++ "):
                plus_path = _marker_path(line)
        path = plus_path or minus_path or _strip_side_prefix(new_token)
        old_path = minus_path if minus_path and minus_path != path else None
        is_renamed = False

    if not path:
        return None

    hunks: List[Hunk] = []
    added: List[DiffLine] = []
    removed: List[DiffLine] = []

    idx = first_hunk
    while idx < len(chunk):
        line = chunk[idx]
        hm = _HUNK_HEADER_RE.match(line)
        if hm is None:
            if line.startswith("@@"):
                logger.debug("Dropping %s: malformed hunk header %r", path, line)
                return None
            idx += 1
            continue

        header = Hunk(
            old_start=int(hm.group(1)),
            old_count=_count(hm.group(2)),
            new_start=int(hm.group(3)),
            new_count=_count(hm.group(4)),
        )
        hunk, hunk_added, hunk_removed, idx = _read_hunk(header, chunk, idx + 1)
        hunks.append(hunk)
        added.extend(hunk_added)
        removed.extend(hunk_removed)

    return ChangeRecord(
        path=path,
        old_path=old_path,
        added_lines=tuple(added),
        removed_lines=tuple(removed),
        hunks=tuple(hunks),
        is_renamed=is_renamed,
    )


class DiffParser:
    """Parse unified diff text into ChangeRecord objects.

    Usage::

        records = DiffParser(diff_text).parse()
        for record in records:
            print(record.path, len(record.added_lines))

    Parsing is deterministic and restartable: ``parse()`` can be called any
    number of times and always returns an equal list.
    """

    def __init__(self, diff_text: str) -> None:
        text = diff_text.lstrip("\ufeff")
        self._empty = not text.strip()
        self._lines = [line.rstrip("\r") for line in text.split("\n")]

    def parse(self) -> List[ChangeRecord]:
        if self._empty:
            return []
        records: List[ChangeRecord] = []
        for chunk in _split_chunks(self._lines):
            record = _parse_chunk(chunk)
            if record is not None:
                records.append(record)
        logger.debug("Parsed %d file record(s) from diff", len(records))
        return records


def parse_diff(diff_text: str) -> List[ChangeRecord]:
    """Shortcut for ``DiffParser(diff_text).parse()``."""
    return DiffParser(diff_text).parse()
