"""Tests for the local git adapter and GitHub PR helpers."""

import subprocess
from pathlib import Path

import pytest

from diffgrade.git import github
from diffgrade.git.adapter import (
    GitError,
    find_default_branch,
    get_branch_diff,
    read_file_contents,
    validate_repo,
)
from diffgrade.git.diff_parser import parse_diff
from diffgrade.git.github import GitHubError, fetch_pr_diff, is_valid_pr_url, validate_pr_url


class TestAdapter:
    def test_branch_diff(self, golden_repo: Path):
        records = parse_diff(get_branch_diff(golden_repo))
        assert [r.path for r in records] == ["src/App.tsx"]
        assert records[0].removed_lines[0].content == '    <Toolbar theme="dark" id="main" />'

    def test_default_branch(self, golden_repo: Path):
        assert find_default_branch(golden_repo) == "main"

    def test_missing_directory(self, tmp_path: Path):
        with pytest.raises(GitError, match="does not exist"):
            validate_repo(tmp_path / "nope")

    def test_not_a_repo(self, tmp_path: Path):
        with pytest.raises(GitError, match="not a git repository"):
            validate_repo(tmp_path)

    def test_read_file_contents_skips_missing(self, golden_repo: Path):
        contents = read_file_contents(golden_repo, ["src/App.tsx", "src/Gone.tsx"])
        assert list(contents) == ["src/App.tsx"]
        assert 'theme="dark"' not in contents["src/App.tsx"]


class TestPrUrls:
    @pytest.mark.parametrize("url", [
        "https://github.com/owner/repo/pull/123",
        "https://github.com/my-org/my.repo/pull/1/",
    ])
    def test_valid(self, url):
        assert is_valid_pr_url(url)

    @pytest.mark.parametrize("url", [
        "https://github.com/owner/repo/issues/123",
        "http://github.com/owner/repo/pull/123",
        "https://gitlab.com/owner/repo/pull/123",
        "https://github.com/owner/repo/pull/abc",
    ])
    def test_invalid(self, url):
        assert not is_valid_pr_url(url)
        with pytest.raises(GitHubError):
            validate_pr_url(url)


class TestFetchPrDiff:
    def test_returns_stdout(self, monkeypatch):
        calls = []

        def fake_run(args, **kwargs):
            calls.append(args)
            return subprocess.CompletedProcess(args, 0, stdout="diff --git a/x b/x\n", stderr="")

        monkeypatch.setattr(github.subprocess, "run", fake_run)
        assert fetch_pr_diff("https://github.com/o/r/pull/7") == "diff --git a/x b/x\n"
        assert calls == [["gh", "pr", "diff", "https://github.com/o/r/pull/7"]]

    def test_failure_raises(self, monkeypatch):
        def fake_run(args, **kwargs):
            return subprocess.CompletedProcess(args, 1, stdout="", stderr="not found")

        monkeypatch.setattr(github.subprocess, "run", fake_run)
        with pytest.raises(GitHubError, match="not found"):
            fetch_pr_diff("https://github.com/o/r/pull/7")

    def test_gh_not_installed(self, monkeypatch):
        def fake_run(args, **kwargs):
            raise FileNotFoundError("gh")

        monkeypatch.setattr(github.subprocess, "run", fake_run)
        with pytest.raises(GitHubError, match="not installed"):
            fetch_pr_diff("https://github.com/o/r/pull/7")
