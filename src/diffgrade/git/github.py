"""GitHub pull-request diffs via the ``gh`` CLI."""

from __future__ import annotations

import logging
import re
import subprocess

logger = logging.getLogger(__name__)

PR_URL_RE = re.compile(r"^https://github\.com/[\w.-]+/[\w.-]+/pull/\d+/?$")


class GitHubError(Exception):
    """Raised when a pull request diff cannot be fetched."""


def _run_gh(args: list[str], timeout: int = 120) -> subprocess.CompletedProcess:
    try:
        return subprocess.run(
            ["gh", *args],
            capture_output=True,
            text=True,
            timeout=timeout,
            encoding="utf-8",
            errors="replace",
        )
    except FileNotFoundError:
        raise GitHubError(
            "GitHub CLI (gh) is not installed. Install it from https://cli.github.com/"
        )
    except subprocess.TimeoutExpired:
        raise GitHubError(f"gh command timed out after {timeout}s: gh {' '.join(args)}")


def is_valid_pr_url(url: str) -> bool:
    return PR_URL_RE.match(url) is not None


def validate_pr_url(url: str) -> None:
    if not is_valid_pr_url(url):
        raise GitHubError(
            f'Invalid GitHub PR URL: "{url}". '
            "Expected format: https://github.com/owner/repo/pull/123"
        )


def validate_gh_cli() -> None:
    """Check that ``gh`` is installed and authenticated."""
    result = _run_gh(["auth", "status"], timeout=30)
    if result.returncode != 0:
        details = (result.stderr or result.stdout).strip()
        raise GitHubError(
            f"GitHub CLI (gh) is not authenticated. Run 'gh auth login' first. Details: {details}"
        )


def fetch_pr_diff(url: str) -> str:
    """Return the raw unified diff of the pull request at *url*."""
    validate_pr_url(url)
    logger.debug("Fetching PR diff: %s", url)
    result = _run_gh(["pr", "diff", url])
    if result.returncode != 0:
        raise GitHubError(f"Failed to fetch PR diff for {url}: {result.stderr.strip()}")
    return result.stdout
