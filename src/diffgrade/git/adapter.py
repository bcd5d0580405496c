"""Git subprocess wrapper — branch diff against the default branch's merge base."""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import Dict, Iterable

logger = logging.getLogger(__name__)

_DEFAULT_BRANCH_CANDIDATES = ("main", "master")
_REMOTE_HEAD_PREFIX = "refs/remotes/origin/"


class GitError(Exception):
    """Raised when git is unavailable or returns an unexpected error."""


def _run_git(args: list[str], cwd: Path, timeout: int = 60) -> str:
    """Run a git command and return stdout. Raises GitError on failure."""
    try:
        result = subprocess.run(
            ["git", *args],
            cwd=cwd,
            capture_output=True,
            text=True,
            timeout=timeout,
            encoding="utf-8",
            errors="replace",
        )
    except FileNotFoundError:
        raise GitError("git is not installed or not on PATH")
    except subprocess.TimeoutExpired:
        raise GitError(f"git command timed out after {timeout}s: git {' '.join(args)}")

    if result.returncode != 0:
        stderr = result.stderr.strip() or f"exit status {result.returncode}"
        raise GitError(f"git {args[0]} failed in {cwd}: {stderr}")
    return result.stdout


def validate_repo(directory: Path) -> None:
    """Raise GitError unless *directory* exists and is inside a git work tree."""
    if not directory.is_dir():
        raise GitError(f'Directory does not exist: "{directory}"')
    try:
        _run_git(["rev-parse", "--git-dir"], cwd=directory)
    except GitError as exc:
        raise GitError(f'Directory is not a git repository: "{directory}"') from exc


def find_default_branch(directory: Path) -> str:
    """Return the branch the checkout was cut from (origin HEAD, main or master)."""
    try:
        ref = _run_git(["symbolic-ref", "refs/remotes/origin/HEAD"], cwd=directory).strip()
    except GitError:
        ref = ""
    if ref.startswith(_REMOTE_HEAD_PREFIX):
        return ref[len(_REMOTE_HEAD_PREFIX):]

    for candidate in _DEFAULT_BRANCH_CANDIDATES:
        try:
            _run_git(["rev-parse", "--verify", "--quiet", candidate], cwd=directory)
        except GitError:
            continue
        return candidate

    raise GitError(
        f'Could not determine default branch in "{directory}". '
        'Neither "main" nor "master" found.'
    )


def get_merge_base(directory: Path, branch: str) -> str:
    """Return the merge base of *branch* and HEAD."""
    try:
        base = _run_git(["merge-base", branch, "HEAD"], cwd=directory).strip()
    except GitError as exc:
        raise GitError(
            f'Failed to compute merge base between "{branch}" and HEAD in "{directory}": {exc}'
        ) from exc
    if not base:
        raise GitError(f'"{branch}" and HEAD share no history in "{directory}"')
    return base


def get_branch_diff(directory: Path) -> str:
    """Return the unified diff from the default branch's merge base to HEAD."""
    validate_repo(directory)
    branch = find_default_branch(directory)
    base = get_merge_base(directory, branch)
    logger.debug("Diffing %s against %s (%s)", directory, branch, base[:12])
    return _run_git(["diff", "--no-color", base, "HEAD"], cwd=directory)


def read_file_contents(directory: Path, paths: Iterable[str]) -> Dict[str, str]:
    """Read working-tree contents of *paths*; unreadable files are skipped."""
    contents: Dict[str, str] = {}
    for rel in paths:
        try:
            contents[rel] = (directory / rel).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError):
            logger.debug("Skipping unreadable file %s", rel)
    return contents
