"""Tests for the two-stage Detector and the built-in detectors."""

from typing import Sequence

import pytest

from diffgrade.analysis.models import StructuredView
from diffgrade.analysis.structure import analyze_source
from diffgrade.detectors.builtin.components import (
    BUTTON_ICON_PROP,
    SELECT_REWRITE,
    TEXT_CONTENT_CONSOLIDATION,
)
from diffgrade.detectors.builtin.css import CSS_CLASS_PREFIX
from diffgrade.detectors.builtin.imports import MODAL_IMPORT_PATH
from diffgrade.detectors.builtin.props import INNER_REF_TO_REF, THEME_DARK_REMOVAL
from diffgrade.detectors.models import (
    Detection,
    DetectionStatus,
    Detector,
    correct,
    incorrect,
    missing,
)
from diffgrade.git.diff_parser import parse_diff
from diffgrade.git.models import ChangeRecord, DiffLine


def _record(
    removed: Sequence[str] = (), added: Sequence[str] = (), path: str = "src/App.tsx"
) -> ChangeRecord:
    return ChangeRecord(
        path=path,
        removed_lines=tuple(DiffLine(i + 1, text) for i, text in enumerate(removed)),
        added_lines=tuple(DiffLine(i + 1, text) for i, text in enumerate(added)),
    )


class TestDetectionStatus:
    def test_credit(self):
        assert DetectionStatus.CORRECT.credit == 1.0
        assert DetectionStatus.INCORRECT.credit == 0.25
        assert DetectionStatus.MISSING.credit == 0.0
        assert DetectionStatus.FILE_MISSING.credit == 0.0
        assert DetectionStatus.NOT_APPLICABLE.credit is None

    def test_closed_set(self):
        assert {s.value for s in DetectionStatus} == {
            "CORRECT", "MISSING", "INCORRECT", "UNNECESSARY", "FILE_MISSING", "NOT_APPLICABLE",
        }


class TestThemeDarkRemoval:
    def test_correct(self, golden_theme_diff, candidate_theme_correct_diff):
        golden = parse_diff(golden_theme_diff)[0]
        candidate = parse_diff(candidate_theme_correct_diff)[0]
        assert THEME_DARK_REMOVAL.detect(golden, candidate).status is DetectionStatus.CORRECT

    def test_missing_when_candidate_leaves_prop(self, golden_theme_diff, candidate_untouched_diff):
        golden = parse_diff(golden_theme_diff)[0]
        candidate = parse_diff(candidate_untouched_diff)[0]
        detection = THEME_DARK_REMOVAL.detect(golden, candidate)
        assert detection.status is DetectionStatus.MISSING

    def test_incorrect_when_readded(self, golden_theme_diff, candidate_theme_readded_diff):
        golden = parse_diff(golden_theme_diff)[0]
        candidate = parse_diff(candidate_theme_readded_diff)[0]
        detection = THEME_DARK_REMOVAL.detect(golden, candidate)
        assert detection.status is DetectionStatus.INCORRECT
        assert "re-added" in detection.message

    def test_file_missing(self, golden_theme_diff):
        golden = parse_diff(golden_theme_diff)[0]
        detection = THEME_DARK_REMOVAL.detect(golden, None)
        assert detection == Detection(
            "theme-dark-removal", DetectionStatus.FILE_MISSING, "Candidate file is missing"
        )

    def test_not_applicable(self, candidate_untouched_diff):
        golden = parse_diff(candidate_untouched_diff)[0]
        detection = THEME_DARK_REMOVAL.detect(golden, None)
        assert detection.status is DetectionStatus.NOT_APPLICABLE
        assert detection.message == 'No theme="dark" removal in golden diff'

    @pytest.mark.parametrize("line", [
        "<Toolbar theme='dark'>",
        "<Toolbar theme={'dark'}>",
        "<Toolbar theme={ThemeVariant.dark}>",
    ])
    def test_quote_styles(self, line):
        golden = _record(removed=[line])
        assert THEME_DARK_REMOVAL.detect(golden, golden).status is DetectionStatus.CORRECT


class TestRenameShape:
    def test_rename_correct(self):
        golden = _record(removed=["<div innerRef={r} />"], added=["<div ref={r} />"])
        assert INNER_REF_TO_REF.detect(golden, golden).status is DetectionStatus.CORRECT

    def test_rename_half_done(self):
        golden = _record(removed=["<div innerRef={r} />"], added=["<div ref={r} />"])
        candidate = _record(removed=["<div innerRef={r} />"], added=["<div />"])
        assert INNER_REF_TO_REF.detect(golden, candidate).status is DetectionStatus.INCORRECT

    def test_custom_messages(self):
        golden = _record(
            removed=["import { Modal, Button } from '@patternfly/react-core';"],
            added=["import { Modal } from '@patternfly/react-core/deprecated';"],
        )
        detection = MODAL_IMPORT_PATH.detect(golden, _record(added=["// nothing"]))
        assert detection.status is DetectionStatus.MISSING
        assert detection.message == "Modal import path change not found in candidate"


class TestReplacementShape:
    def test_adding_new_is_enough(self):
        golden = _record(removed=['className="pf-v5-c-card"'], added=['className="pf-v6-c-card"'])
        candidate = _record(added=['className="pf-v6-c-card"'])
        assert CSS_CLASS_PREFIX.detect(golden, candidate).status is DetectionStatus.CORRECT

    def test_removed_without_replacement(self):
        golden = _record(removed=['className="pf-v5-c-card"'], added=['className="pf-v6-c-card"'])
        candidate = _record(removed=['className="pf-v5-c-card"'], added=['className="card"'])
        assert CSS_CLASS_PREFIX.detect(golden, candidate).status is DetectionStatus.INCORRECT


class TestTextContent:
    def test_partial_prop_renames_reported(self):
        golden = _record(
            removed=["<TextContent>", "<TextList isPlain>"],
            added=["<Content>", "<Content component='ul' isPlainList>"],
        )
        candidate = _record(
            removed=["<TextContent>", "<TextList isPlain>"],
            added=["<Content>", "<Content component='ul' isPlain>"],
        )
        detection = TEXT_CONTENT_CONSOLIDATION.detect(golden, candidate)
        assert detection.status is DetectionStatus.INCORRECT
        assert detection.details == ("Missing isPlain -> isPlainList rename",)


class TestSelectRewrite:
    GOLDEN = _record(
        removed=["<Select onToggle={onToggle} isOpen={isOpen} selections={sel}>"],
        added=["<Select toggle={(ref) => <MenuToggle ref={ref} />} onOpenChange={setOpen}>"],
    )

    def test_text_stage_correct(self):
        assert SELECT_REWRITE.detect(self.GOLDEN, self.GOLDEN).status is DetectionStatus.CORRECT

    def test_text_stage_old_api_kept(self):
        candidate = _record(
            removed=["<Select onToggle={onToggle} isOpen={isOpen} selections={sel}>"],
            added=["<Select onToggle={toggle} isOpen={isOpen}>"],
        )
        detection = SELECT_REWRITE.detect(self.GOLDEN, candidate)
        assert detection.status is DetectionStatus.INCORRECT
        assert "onToggle prop still used (old API)" in detection.details

    def test_structured_stage_flags_leftover_props(self):
        golden_view = analyze_source("<Select isOpen={open} onToggle={t} />", "a.tsx")
        candidate_view = analyze_source(
            "<Select isOpen={open} toggle={t}><SelectList /></Select>", "a.tsx"
        )
        detection = SELECT_REWRITE.detect(self.GOLDEN, self.GOLDEN, golden_view, candidate_view)
        assert detection.status is DetectionStatus.INCORRECT
        assert detection.details == ("Old Select props still present: isOpen",)


class TestButtonIcon:
    def test_structured_stage_sees_icon_prop(self):
        golden = _record(
            removed=['<Button variant="plain">'],
            added=['<Button variant="plain" icon={<TimesIcon />} />'],
        )
        candidate = _record(added=["const x = 1;"])
        golden_view = analyze_source('<Button variant="plain"><TimesIcon /></Button>', "a.tsx")
        candidate_view = analyze_source("<Button\n  icon={<TimesIcon />}\n/>", "a.tsx")

        assert BUTTON_ICON_PROP.detect(golden, candidate).status is DetectionStatus.MISSING
        detection = BUTTON_ICON_PROP.detect(golden, candidate, golden_view, candidate_view)
        assert detection.status is DetectionStatus.CORRECT


def _staged(inspect=None) -> Detector:
    return Detector(
        id="staged",
        name="Staged",
        complexity="moderate",
        description="",
        subject="staged change",
        applies=lambda golden: True,
        evaluate=lambda golden, candidate: missing("text stage"),
        inspect=inspect,
    )


class TestTwoStage:
    VIEW = StructuredView(path="a.tsx")

    def test_conclusive_structured_verdict_wins(self):
        detector = _staged(lambda g, c: correct("structured stage"))
        detection = detector.detect(_record(), _record(), self.VIEW, self.VIEW)
        assert detection.message == "structured stage"

    def test_inconclusive_falls_through(self):
        detector = _staged(lambda g, c: None)
        detection = detector.detect(_record(), _record(), self.VIEW, self.VIEW)
        assert detection.message == "text stage"

    def test_missing_view_skips_structured_stage(self):
        calls = []

        def inspect(g, c):
            calls.append(1)
            return correct("structured stage")

        detection = _staged(inspect).detect(_record(), _record(), self.VIEW, None)
        assert detection.message == "text stage"
        assert calls == []

    def test_view_with_parse_errors_is_ignored(self):
        broken = StructuredView(path="a.tsx", parse_errors=("Unterminated <X> tag",))
        detector = _staged(lambda g, c: incorrect("structured stage"))
        detection = detector.detect(_record(), _record(), self.VIEW, broken)
        assert detection.message == "text stage"

    def test_weight_follows_complexity(self):
        assert _staged().weight == 2
        assert THEME_DARK_REMOVAL.weight == 1
        assert SELECT_REWRITE.weight == 3
