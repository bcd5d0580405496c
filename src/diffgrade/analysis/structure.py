"""Best-effort structured views of JS/TS sources.

Extracts ES import declarations and JSX tag usages (attributes and direct
child tag names) with a small hand-written scanner. This is not a parser:
it tolerates partial snippets such as the added lines of a diff, and when
it cannot find the end of a tag it gives up on the whole file, returning an
empty view with a parse-error note. Detectors treat such views as absent.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from pathlib import PurePosixPath
from typing import List, Optional, Tuple

from diffgrade.analysis.models import Attribute, ImportDecl, StructuredView, TagUsage
from diffgrade.git.models import ChangeRecord

logger = logging.getLogger(__name__)

STRUCTURED_SUFFIXES = frozenset({".js", ".jsx", ".ts", ".tsx"})

_IMPORT_FROM_RE = re.compile(
    r"""^\s*import\s+(?P<clause>[^'";]+?)\s+from\s+['"](?P<module>[^'"]+)['"]""",
    re.MULTILINE,
)
_IMPORT_BARE_RE = re.compile(r"""^\s*import\s+['"](?P<module>[^'"]+)['"]""", re.MULTILINE)
_IDENTIFIER_RE = re.compile(r"^[A-Za-z_$][\w$]*$")

_OPEN_TAG_RE = re.compile(r"<([A-Za-z][\w.]*)")
_CLOSE_TAG_RE = re.compile(r"</\s*([A-Za-z][\w.]*)?\s*>")
_ATTR_NAME_RE = re.compile(r"[A-Za-z_$][\w$.:-]*")
_BARE_VALUE_RE = re.compile(r"[^\s/>]+")


class _UnterminatedTag(Exception):
    pass


@dataclass
class _TagBuilder:
    tag: str
    attributes: List[Attribute] = field(default_factory=list)
    children: List[str] = field(default_factory=list)

    def freeze(self) -> TagUsage:
        return TagUsage(
            tag=self.tag,
            attributes=tuple(self.attributes),
            children=tuple(self.children),
        )


# ---- imports ----


def _parse_import_clause(clause: str, module: str) -> ImportDecl:
    clause = clause.strip()
    if clause.startswith("type "):
        clause = clause[5:].strip()

    names: List[str] = []
    brace = clause.find("{")
    if brace != -1:
        inner = clause[brace + 1:clause.rfind("}")] if "}" in clause else clause[brace + 1:]
        for spec in inner.split(","):
            spec = spec.strip()
            if spec.startswith("type "):
                spec = spec[5:].strip()
            name = spec.split(" as ", 1)[0].strip()
            if name:
                names.append(name)
        head = clause[:brace]
    else:
        head = clause

    default = None
    for part in head.split(","):
        part = part.strip()
        if part and not part.startswith("*") and _IDENTIFIER_RE.match(part):
            default = part
            break

    return ImportDecl(module=module, names=tuple(names), default=default)


def _scan_imports(text: str) -> List[Tuple[int, ImportDecl]]:
    found: List[Tuple[int, ImportDecl]] = []
    for m in _IMPORT_FROM_RE.finditer(text):
        found.append((m.start(), _parse_import_clause(m.group("clause"), m.group("module"))))
    for m in _IMPORT_BARE_RE.finditer(text):
        found.append((m.start(), ImportDecl(module=m.group("module"))))
    found.sort(key=lambda item: item[0])
    return found


# ---- JSX tags ----


def _skip_string(text: str, pos: int) -> int:
    """Index just past the string literal opening at *pos*, or -1."""
    quote = text[pos]
    i = pos + 1
    while i < len(text):
        ch = text[i]
        if ch == "\\":
            i += 2
            continue
        if ch == quote:
            return i + 1
        i += 1
    return -1


def _skip_braces(text: str, pos: int) -> int:
    """Index just past the ``{...}`` expression opening at *pos*, or -1."""
    depth = 0
    i = pos
    while i < len(text):
        ch = text[i]
        if ch in "\"'`":
            i = _skip_string(text, i)
            if i == -1:
                return -1
            continue
        if ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return i + 1
        i += 1
    return -1


def _skip_space(text: str, pos: int) -> int:
    while pos < len(text) and text[pos].isspace():
        pos += 1
    return pos


def _read_attributes(
    text: str, pos: int, builder: _TagBuilder, found: List[_TagBuilder]
) -> Tuple[int, bool]:
    """Read attributes up to the end of the opening tag.

    Returns (index after the tag, self_closing). Tags nested inside
    attribute expressions are appended to *found*.
    """
    while True:
        pos = _skip_space(text, pos)
        if pos >= len(text):
            raise _UnterminatedTag(f"Unterminated <{builder.tag}> tag")
        if text.startswith("/>", pos):
            return pos + 2, True
        ch = text[pos]
        if ch == ">":
            return pos + 1, False
        if ch == "{":
            # {...spread}
            end = _skip_braces(text, pos)
            if end == -1:
                raise _UnterminatedTag(f"Unterminated expression in <{builder.tag}>")
            found.extend(_scan_tags(text[pos + 1:end - 1]))
            pos = end
            continue

        m = _ATTR_NAME_RE.match(text, pos)
        if m is None:
            pos += 1
            continue
        name = m.group(0)
        pos = _skip_space(text, m.end())
        if pos >= len(text) or text[pos] != "=":
            builder.attributes.append(Attribute(name))
            continue

        pos = _skip_space(text, pos + 1)
        if pos >= len(text):
            raise _UnterminatedTag(f"Unterminated <{builder.tag}> tag")
        ch = text[pos]
        if ch in "\"'":
            end = _skip_string(text, pos)
            if end == -1:
                raise _UnterminatedTag(f"Unterminated attribute {name} in <{builder.tag}>")
            value = text[pos + 1:end - 1]
        elif ch == "{":
            end = _skip_braces(text, pos)
            if end == -1:
                raise _UnterminatedTag(f"Unterminated attribute {name} in <{builder.tag}>")
            value = text[pos + 1:end - 1].strip()
            found.extend(_scan_tags(value))
        else:
            bare = _BARE_VALUE_RE.match(text, pos)
            end = bare.end() if bare else pos + 1
            value = text[pos:end]
        builder.attributes.append(Attribute(name, value))
        pos = end


def _close(stack: List[Optional[_TagBuilder]], name: str) -> None:
    """Pop the stack back to the element *name* closes (None = fragment)."""
    for idx in range(len(stack) - 1, -1, -1):
        entry = stack[idx]
        if (entry is None and not name) or (entry is not None and entry.tag == name):
            del stack[idx:]
            return


def _scan_tags(text: str) -> List[_TagBuilder]:
    found: List[_TagBuilder] = []
    stack: List[Optional[_TagBuilder]] = []  # None marks a <> fragment
    i = 0
    while True:
        i = text.find("<", i)
        if i == -1 or i + 1 >= len(text):
            break
        nxt = text[i + 1]

        if nxt == "/":
            close = _CLOSE_TAG_RE.match(text, i)
            if close is None:
                i += 2
                continue
            _close(stack, close.group(1) or "")
            i = close.end()
            continue

        if nxt == ">":
            stack.append(None)
            i += 2
            continue

        # Generics and comparisons: Array<Item>, i<n
        if i > 0 and (text[i - 1].isalnum() or text[i - 1] in "_$)]"):
            i += 1
            continue

        m = _OPEN_TAG_RE.match(text, i)
        if m is None:
            i += 1
            continue

        builder = _TagBuilder(tag=m.group(1))
        parent = stack[-1] if stack else None
        if parent is not None:
            parent.children.append(builder.tag)
        found.append(builder)
        i, self_closing = _read_attributes(text, m.end(), builder, found)
        if not self_closing:
            stack.append(builder)

    return found


# ---- public API ----


def supports_structure(path: str) -> bool:
    return PurePosixPath(path).suffix in STRUCTURED_SUFFIXES


def analyze_source(text: str, path: str) -> StructuredView:
    """Build a StructuredView of *text*; never raises."""
    try:
        builders = _scan_tags(text)
    except _UnterminatedTag as exc:
        logger.debug("Structured view of %s unavailable: %s", path, exc)
        return StructuredView(path=path, parse_errors=(str(exc),))
    imports = tuple(decl for _, decl in _scan_imports(text))
    return StructuredView(
        path=path,
        imports=imports,
        tags=tuple(b.freeze() for b in builders),
    )


def reconstruct_from_record(record: ChangeRecord) -> str:
    """Approximate new-file content from a record's added lines."""
    lines = sorted(record.added_lines, key=lambda line: line.line_no)
    return "\n".join(line.content for line in lines)


def analyze_record(record: ChangeRecord) -> StructuredView:
    return analyze_source(reconstruct_from_record(record), record.path)


def view_for(record: ChangeRecord, source: Optional[str] = None) -> Optional[StructuredView]:
    """Structured view for *record*, from full *source* text when available.

    Returns None for binary records and for files that are not JS/TS.
    """
    if record.is_binary or not supports_structure(record.path):
        return None
    if source is not None:
        return analyze_source(source, record.path)
    return analyze_record(record)
