"""File matching and structured source views."""

from diffgrade.analysis.matcher import is_excluded, match_files, normalize_path
from diffgrade.analysis.models import (
    Attribute,
    ImportDecl,
    MatchedPair,
    MatchResult,
    StructuredView,
    TagUsage,
)
from diffgrade.analysis.structure import analyze_record, analyze_source, view_for

__all__ = [
    "Attribute",
    "ImportDecl",
    "MatchResult",
    "MatchedPair",
    "StructuredView",
    "TagUsage",
    "analyze_record",
    "analyze_source",
    "is_excluded",
    "match_files",
    "normalize_path",
    "view_for",
]
