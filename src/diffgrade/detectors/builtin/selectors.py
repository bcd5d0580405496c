"""Test selector rewrite detector."""

from __future__ import annotations

from typing import List, Tuple

from diffgrade.detectors.models import Detector, Verdict, correct, incorrect, missing
from diffgrade.detectors.shapes import LinePredicate, adds, any_of, removes
from diffgrade.git.models import ChangeRecord

_DATA_TESTID = any_of(r"\bdata-testid\b")
_ARIA_LABEL = any_of(r"\baria-label\b")
_V5_CSS_SELECTOR = any_of(r"\.pf-v5-c-")
_V6_CSS_SELECTOR = any_of(r"\.pf-v6-c-")
_V5_CLASS = any_of(r"pf-v5-c-[\w-]+")
_V6_CLASS = any_of(r"pf-v6-c-[\w-]+")

_QUERY_VERBS = ("get", "query", "find", "getAll", "queryAll", "findAll")
_TEST_QUERIES = any_of(
    *(rf"{verb}ByTestId" for verb in _QUERY_VERBS),
    *(rf"{verb}ByRole" for verb in _QUERY_VERBS),
    *(rf"{verb}ByLabelText" for verb in _QUERY_VERBS),
    r"cy\.get\s*\(",
)

def _either(*predicates: LinePredicate) -> LinePredicate:
    return lambda text: any(predicate(text) for predicate in predicates)


_OLD_SELECTORS = _either(_DATA_TESTID, _ARIA_LABEL, _V5_CSS_SELECTOR, _V5_CLASS)
_NEW_SELECTORS = _either(_DATA_TESTID, _ARIA_LABEL, _V6_CSS_SELECTOR, _V6_CLASS)

# (removed-side predicate, added-side predicate, message when absent)
_CATEGORIES: Tuple[Tuple[LinePredicate, LinePredicate, str], ...] = (
    (_DATA_TESTID, _DATA_TESTID, "data-testid updates not found in candidate"),
    (_ARIA_LABEL, _ARIA_LABEL, "aria-label updates not found in candidate"),
    (
        _V5_CSS_SELECTOR,
        _V6_CSS_SELECTOR,
        "CSS selector updates (pf-v5-c-* -> pf-v6-c-*) not found in candidate",
    ),
    (_TEST_QUERIES, _TEST_QUERIES, "Test query function updates not found in candidate"),
)


def _changes(record: ChangeRecord, old: LinePredicate, new: LinePredicate) -> bool:
    return removes(record, old) and adds(record, new)


def _selectors_applies(golden: ChangeRecord) -> bool:
    return (
        _changes(golden, _OLD_SELECTORS, _NEW_SELECTORS)
        or _changes(golden, _TEST_QUERIES, _TEST_QUERIES)
        or _changes(golden, _V5_CSS_SELECTOR, _V6_CSS_SELECTOR)
    )


def _selectors_evaluate(golden: ChangeRecord, candidate: ChangeRecord) -> Verdict:
    expected = 0
    matched = 0
    absent: List[str] = []
    for old, new, message in _CATEGORIES:
        if not _changes(golden, old, new):
            continue
        expected += 1
        if _changes(candidate, old, new):
            matched += 1
        else:
            absent.append(message)

    # Golden only swaps selectors across categories, e.g. data-testid for a pf-v6 class.
    if not expected:
        if _changes(candidate, _OLD_SELECTORS, _NEW_SELECTORS):
            return correct("Test selectors correctly updated")
        return missing("Test selector updates not found in candidate")

    golden_css = _changes(golden, _V5_CSS_SELECTOR, _V6_CSS_SELECTOR)
    candidate_css = _changes(candidate, _V5_CSS_SELECTOR, _V6_CSS_SELECTOR)
    if golden_css and not candidate_css and adds(candidate, _V5_CSS_SELECTOR):
        return incorrect(
            "Test selectors partially updated - pf-v5 CSS selectors still present",
            "Candidate adds pf-v5-c-* selectors instead of pf-v6-c-*",
            *absent,
        )

    if matched == expected:
        return correct("Test selectors correctly updated")
    if matched:
        return incorrect("Test selectors partially updated", *absent)
    return missing("Test selector updates not found in candidate")


TEST_SELECTOR_REWRITE = Detector(
    id="test-selector-rewrite",
    name="Test Selector Rewrite",
    complexity="complex",
    description="Detects test selector updates (data-testid, aria-label, CSS selectors).",
    subject="test selector changes",
    applies=_selectors_applies,
    evaluate=_selectors_evaluate,
)

ALL_SELECTOR_DETECTORS = [TEST_SELECTOR_REWRITE]
