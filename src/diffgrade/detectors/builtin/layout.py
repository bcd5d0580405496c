"""Toolbar, page and masthead layout detectors."""

from __future__ import annotations

from typing import List, Optional

from diffgrade.analysis.models import StructuredView
from diffgrade.detectors.models import Detector, Verdict, correct, incorrect, missing
from diffgrade.detectors.shapes import LinePredicate, adds, all_of, any_of, removes
from diffgrade.git.models import ChangeRecord


def _variant(value: str) -> str:
    return rf"""variant\s*=\s*(?:"|'|\{{['"])({value})(?:"|'|\}}|['"])"""


def _section_variant(value: str) -> str:
    return rf"""variant\s*=\s*(?:"|'|\{{['"]|\{{PageSectionVariants\.){value}(?:"|'|\}}|['"])"""


def _either(*predicates: LinePredicate) -> LinePredicate:
    return lambda text: any(p(text) for p in predicates)


# ---- toolbar-variant ----

_CHIP_GROUP_VARIANT = any_of(_variant("chip-group"))
_LABEL_GROUP_VARIANT = any_of(_variant("label-group"))
_OLD_TOOLBAR_VARIANTS = any_of(_variant("chip-group|bulk-select|overflow-menu|search-filter"))


def _toolbar_variant_evaluate(golden: ChangeRecord, candidate: ChangeRecord) -> Verdict:
    if not removes(candidate, _OLD_TOOLBAR_VARIANTS):
        return missing("ToolbarItem variant changes not found in candidate")

    details: List[str] = []
    if (
        removes(golden, _CHIP_GROUP_VARIANT)
        and removes(candidate, _CHIP_GROUP_VARIANT)
        and not adds(candidate, _LABEL_GROUP_VARIANT)
    ):
        details.append("chip-group variant removed but label-group not added")
    if adds(candidate, _OLD_TOOLBAR_VARIANTS):
        details.append("Old variant values re-added in candidate")

    if details:
        return incorrect("ToolbarItem variant partially migrated", *details)
    return correct("ToolbarItem variant props correctly updated")


TOOLBAR_VARIANT = Detector(
    id="toolbar-variant",
    name="Toolbar Variant",
    complexity="moderate",
    description=(
        "Detects ToolbarItem variant prop changes (chip-group -> label-group, "
        "removal of bulk-select/overflow-menu/search-filter)."
    ),
    subject="ToolbarItem variant changes",
    applies=lambda golden: removes(golden, _OLD_TOOLBAR_VARIANTS),
    evaluate=_toolbar_variant_evaluate,
)


# ---- toolbar-gap ----

_OLD_SPACERS = any_of(r"\bspacer\s*=\s*\{", r"\bspaceItems\s*=\s*\{")
_NEW_GAPS = any_of(r"\bgap\s*=\s*\{", r"\bcolumnGap\s*=\s*\{", r"\browGap\s*=\s*\{")


def _toolbar_gap_evaluate(golden: ChangeRecord, candidate: ChangeRecord) -> Verdict:
    removes_spacers = removes(candidate, _OLD_SPACERS)
    adds_gaps = adds(candidate, _NEW_GAPS)
    if not removes_spacers and not adds_gaps:
        return missing("Toolbar gap/spacer changes not found in candidate")

    details: List[str] = []
    if adds(golden, _NEW_GAPS) and removes_spacers and not adds_gaps:
        details.append("spacer props removed but gap props not added")
    if adds(candidate, _OLD_SPACERS):
        details.append("Old spacer props re-added in candidate")

    if details:
        return incorrect("Toolbar gap/spacer partially migrated", *details)
    return correct("Toolbar gap/spacer props correctly updated")


TOOLBAR_GAP = Detector(
    id="toolbar-gap",
    name="Toolbar Gap",
    complexity="moderate",
    description="Detects Toolbar spacer/spaceItems -> gap/columnGap/rowGap changes.",
    subject="Toolbar gap/spacer changes",
    applies=lambda golden: removes(golden, _OLD_SPACERS) or adds(golden, _NEW_GAPS),
    evaluate=_toolbar_gap_evaluate,
)


# ---- page-section-variant ----

_OLD_SECTION_VARIANTS = _either(
    any_of(_section_variant("light"), _section_variant("dark"), _section_variant("darker")),
    all_of(r"\bPageSectionVariants\b", r"\bPageSection\b"),
)
_SECTION_VARIANTS_IMPORT = all_of(r"\bPageSectionVariants\b", r"import")


def _page_section_applies(golden: ChangeRecord) -> bool:
    return removes(golden, _OLD_SECTION_VARIANTS) or removes(golden, _SECTION_VARIANTS_IMPORT)


def _page_section_evaluate(golden: ChangeRecord, candidate: ChangeRecord) -> Verdict:
    if not _page_section_applies(candidate):
        return missing("PageSection variant changes not found in candidate")

    details: List[str] = []
    if adds(candidate, _OLD_SECTION_VARIANTS):
        details.append("Old PageSection variant values re-added in candidate")
    if adds(candidate, _SECTION_VARIANTS_IMPORT):
        details.append("PageSectionVariants import re-added in candidate")

    if details:
        return incorrect("PageSection variant partially migrated", *details)
    return correct("PageSection variant props correctly updated")


PAGE_SECTION_VARIANT = Detector(
    id="page-section-variant",
    name="PageSection Variant",
    complexity="moderate",
    description=(
        "Detects removal of the light/dark/darker PageSection variants "
        "and the PageSectionVariants enum."
    ),
    subject="PageSection variant changes",
    applies=_page_section_applies,
    evaluate=_page_section_evaluate,
)


# ---- page-masthead ----

_OLD_HEADER = any_of(r"\bheader\s*=\s*\{", r"\bPageHeader\b")
_NEW_MASTHEAD = any_of(r"\bmasthead\s*=\s*\{", r"\bMasthead\b(?!Content|Brand|Toggle|Main)")


def _page_masthead_evaluate(golden: ChangeRecord, candidate: ChangeRecord) -> Verdict:
    removes_header = removes(candidate, _OLD_HEADER)
    adds_masthead = adds(candidate, _NEW_MASTHEAD)
    if not removes_header and not adds_masthead:
        return missing("Page masthead prop change not found in candidate")

    details: List[str] = []
    if adds(golden, _NEW_MASTHEAD) and removes_header and not adds_masthead:
        details.append("header prop removed but masthead prop not added")
    if adds(candidate, _OLD_HEADER):
        details.append("Old PageHeader/header prop re-added in candidate")

    if details:
        return incorrect("Page masthead migration partially completed", *details)
    return correct("Page masthead prop correctly migrated")


PAGE_MASTHEAD = Detector(
    id="page-masthead",
    name="Page Masthead",
    complexity="moderate",
    description="Detects Page header/PageHeader -> masthead/Masthead changes.",
    subject="Page masthead prop changes",
    applies=lambda golden: removes(golden, _OLD_HEADER) or adds(golden, _NEW_MASTHEAD),
    evaluate=_page_masthead_evaluate,
)


# ---- masthead-reorganization ----

_MASTHEAD_PARTS = any_of(
    r"\bMastheadToggle\b", r"\bMastheadMain\b", r"\bMastheadBrand\b", r"\bMastheadContent\b"
)
_MASTHEAD_LOGO = any_of(r"\bMastheadLogo\b")

_LOGO_NOT_INTRODUCED = (
    "MastheadLogo component not introduced (MastheadLogo belongs inside MastheadBrand)"
)


def _restructures_parts(record: ChangeRecord) -> bool:
    return removes(record, _MASTHEAD_PARTS) and adds(record, _MASTHEAD_PARTS)


def _masthead_applies(golden: ChangeRecord) -> bool:
    return adds(golden, _MASTHEAD_LOGO) or _restructures_parts(golden)


def _masthead_inspect(golden: StructuredView, candidate: StructuredView) -> Optional[Verdict]:
    if not any(golden.has_tag(t) for t in ("MastheadToggle", "MastheadMain", "MastheadBrand")):
        return None
    if candidate.has_tag("MastheadLogo"):
        return correct("Masthead hierarchy correctly reorganized with MastheadLogo")
    if all(candidate.has_tag(t) for t in ("MastheadToggle", "MastheadMain", "MastheadBrand")):
        return incorrect("Masthead partially reorganized - missing MastheadLogo", _LOGO_NOT_INTRODUCED)
    return None


def _masthead_evaluate(golden: ChangeRecord, candidate: ChangeRecord) -> Verdict:
    if adds(candidate, _MASTHEAD_LOGO):
        return correct("Masthead hierarchy correctly reorganized with MastheadLogo")
    if _restructures_parts(candidate):
        if adds(golden, _MASTHEAD_LOGO):
            return incorrect(
                "Masthead partially reorganized - missing MastheadLogo", _LOGO_NOT_INTRODUCED
            )
        return correct("Masthead hierarchy correctly reorganized")
    return missing("Masthead hierarchy reorganization not found in candidate")


MASTHEAD_REORGANIZATION = Detector(
    id="masthead-reorganization",
    name="Masthead Reorganization",
    complexity="complex",
    description=(
        "Detects the Masthead hierarchy reorganization (MastheadToggle moves into "
        "MastheadMain, MastheadLogo introduced)."
    ),
    subject="Masthead hierarchy reorganization",
    applies=_masthead_applies,
    evaluate=_masthead_evaluate,
    inspect=_masthead_inspect,
)

ALL_LAYOUT_DETECTORS = [
    TOOLBAR_VARIANT,
    TOOLBAR_GAP,
    PAGE_SECTION_VARIANT,
    PAGE_MASTHEAD,
    MASTHEAD_REORGANIZATION,
]
