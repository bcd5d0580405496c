"""Stylesheet and class-name detectors."""

from diffgrade.detectors.shapes import any_of, contains_any, replacement_detector

PHYSICAL_PROPERTIES = (
    "PaddingTop", "PaddingBottom", "PaddingLeft", "PaddingRight",
    "MarginTop", "MarginBottom", "MarginLeft", "MarginRight",
)

LOGICAL_PROPERTIES = (
    "PaddingBlockStart", "PaddingBlockEnd", "PaddingInlineStart", "PaddingInlineEnd",
    "MarginBlockStart", "MarginBlockEnd", "MarginInlineStart", "MarginInlineEnd",
)

CSS_CLASS_PREFIX = replacement_detector(
    id="css-class-prefix",
    name="CSS Class Prefix Rename",
    description="Detects pf-v5-* to pf-v6-* CSS class prefix renames.",
    old=any_of(r"\bpf-v5-[\w-]+"),
    new=any_of(r"\bpf-v6-[\w-]+"),
    old_label="pf-v5-* classes",
    new_label="pf-v6-* classes",
    subject="pf-v5/pf-v6 class prefix changes",
)

UTILITY_CLASS_RENAME = replacement_detector(
    id="utility-class-rename",
    name="Utility Class Rename",
    description="Detects pf-v5-u-* to pf-v6-u-* utility class renames.",
    old=any_of(r"\bpf-v5-u-[\w-]+"),
    new=any_of(r"\bpf-v6-u-[\w-]+"),
    old_label="pf-v5-u-* utility classes",
    new_label="pf-v6-u-* utility classes",
    subject="pf-v5-u/pf-v6-u utility class changes",
)

CSS_LOGICAL_PROPERTIES = replacement_detector(
    id="css-logical-properties",
    name="CSS Logical Properties",
    description=(
        "Detects physical-to-logical CSS property renames "
        "(e.g. --PaddingTop -> --PaddingBlockStart)."
    ),
    old=contains_any(*PHYSICAL_PROPERTIES),
    new=contains_any(*LOGICAL_PROPERTIES),
    old_label="Physical CSS properties",
    new_label="logical CSS properties",
    subject="physical-to-logical CSS property changes",
)

ALL_CSS_DETECTORS = [CSS_CLASS_PREFIX, UTILITY_CLASS_RENAME, CSS_LOGICAL_PROPERTIES]
