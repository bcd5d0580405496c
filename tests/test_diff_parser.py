"""Tests for the unified diff parser."""

from diffgrade.git.diff_parser import DiffParser, parse_diff
from diffgrade.git.models import DiffLine


class TestSingleFile:
    def test_simple_change(self, sample_diff_simple: str):
        records = parse_diff(sample_diff_simple)
        assert len(records) == 1
        rec = records[0]
        assert rec.path == "f"
        assert rec.removed_lines == (DiffLine(1, "old"),)
        assert rec.added_lines == (DiffLine(1, "new"),)
        assert rec.is_binary is False
        assert rec.is_renamed is False
        assert rec.old_path is None

    def test_hunk_body_excludes_header(self, sample_diff_simple: str):
        hunk = parse_diff(sample_diff_simple)[0].hunks[0]
        assert (hunk.old_start, hunk.old_count, hunk.new_start, hunk.new_count) == (1, 2, 1, 2)
        assert hunk.lines == ("-old", "+new", " unchanged")

    def test_line_numbers_follow_context(self, golden_theme_diff: str):
        rec = parse_diff(golden_theme_diff)[0]
        assert rec.removed_lines[0].line_no == 11
        assert rec.added_lines[0].line_no == 11
        assert rec.added_lines[0].content == '    <Toolbar id="main" />'

    def test_omitted_counts_default_to_one(self):
        diff = "diff --git a/x b/x\n--- a/x\n+++ b/x\n@@ -3 +3 @@\n-a\n+b\n"
        hunk = parse_diff(diff)[0].hunks[0]
        assert hunk.old_count == 1
        assert hunk.new_count == 1


class TestMultiFile:
    def test_records_in_order(self, sample_diff_multi: str):
        records = parse_diff(sample_diff_multi)
        assert [r.path for r in records] == ["src/a.ts", "src/new.ts", "src/gone.ts"]

    def test_second_hunk_numbering(self, sample_diff_multi: str):
        rec = parse_diff(sample_diff_multi)[0]
        assert len(rec.hunks) == 2
        assert [l.line_no for l in rec.added_lines] == [2, 21]
        assert rec.added_lines[1].content == "// added"

    def test_new_file(self, sample_diff_multi: str):
        rec = parse_diff(sample_diff_multi)[1]
        assert [l.line_no for l in rec.added_lines] == [1, 2]
        assert rec.removed_lines == ()
        assert rec.old_path is None

    def test_deleted_file_keeps_old_path(self, sample_diff_multi: str):
        rec = parse_diff(sample_diff_multi)[2]
        assert rec.path == "src/gone.ts"
        assert rec.removed_lines == (DiffLine(1, "export const gone = true;"),)
        assert rec.added_lines == ()

    def test_hunk_counts_agree_with_body(self, sample_diff_multi: str):
        for rec in parse_diff(sample_diff_multi):
            for hunk in rec.hunks:
                old = sum(1 for l in hunk.lines if l[:1] in ("-", " "))
                new = sum(1 for l in hunk.lines if l[:1] in ("+", " "))
                assert old == hunk.old_count
                assert new == hunk.new_count


class TestSpecialFiles:
    def test_binary(self, sample_diff_binary: str):
        rec = parse_diff(sample_diff_binary)[0]
        assert rec.path == "assets/logo.png"
        assert rec.is_binary is True
        assert rec.hunks == ()
        assert rec.added_lines == ()

    def test_rename(self, sample_diff_rename: str):
        rec = parse_diff(sample_diff_rename)[0]
        assert rec.is_renamed is True
        assert rec.path == "src/NewName.tsx"
        assert rec.old_path == "src/OldName.tsx"
        assert rec.added_lines == (DiffLine(2, "export const NewName = () => null;"),)

    def test_no_newline_marker_skipped(self):
        diff = (
            "diff --git a/x b/x\n--- a/x\n+++ b/x\n@@ -1 +1 @@\n-a\n"
            "\\ No newline at end of file\n+b\n\\ No newline at end of file\n"
        )
        rec = parse_diff(diff)[0]
        assert rec.removed_lines == (DiffLine(1, "a"),)
        assert rec.added_lines == (DiffLine(1, "b"),)


class TestTolerance:
    def test_empty_input(self):
        assert parse_diff("") == []
        assert parse_diff("   \n\n") == []

    def test_bom_and_crlf(self, sample_diff_simple: str):
        text = "\ufeff" + sample_diff_simple.replace("\n", "\r\n")
        assert parse_diff(text) == parse_diff(sample_diff_simple)

    def test_malformed_hunk_drops_only_that_file(self, sample_diff_simple: str):
        broken = "diff --git a/bad b/bad\n--- a/bad\n+++ b/bad\n@@ nonsense @@\n+x\n"
        records = parse_diff(broken + sample_diff_simple)
        assert [r.path for r in records] == ["f"]

    def test_preamble_before_first_boundary_ignored(self, sample_diff_simple: str):
        text = "From 1234 Mon Sep 17 00:00:00 2001\nSubject: x\n\n" + sample_diff_simple
        assert [r.path for r in parse_diff(text)] == ["f"]

    def test_parse_is_repeatable(self, sample_diff_multi: str):
        parser = DiffParser(sample_diff_multi)
        assert parser.parse() == parser.parse()
