"""Diff ingestion — parser, data models, local and GitHub diff sources."""

from diffgrade.git.diff_parser import DiffParser, parse_diff
from diffgrade.git.models import ChangeRecord, DiffLine, Hunk

__all__ = ["ChangeRecord", "DiffLine", "DiffParser", "Hunk", "parse_diff"]
