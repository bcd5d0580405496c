"""Single-prop renames and removals."""

from diffgrade.detectors.shapes import any_of, removal_detector, rename_detector

THEME_DARK_RE = (
    r"theme\s*=\s*(?:\"dark\"|'dark'|\{['\"]dark['\"]\}|\{ThemeVariant\.dark\})"
)

THEME_DARK_REMOVAL = removal_detector(
    id="theme-dark-removal",
    name="Theme Dark Removal",
    description='Detects removal of the theme="dark" prop.',
    pattern=any_of(THEME_DARK_RE),
    label='theme="dark" prop',
    subject='theme="dark" removal',
)

SPACE_ITEMS_REMOVAL = removal_detector(
    id="space-items-removal",
    name="SpaceItems Removal",
    description="Detects removal of the spaceItems prop.",
    pattern=any_of(r"\bspaceItems\s*[={]"),
    label="spaceItems prop",
    subject="spaceItems removal",
)

INNER_REF_TO_REF = rename_detector(
    id="inner-ref-to-ref",
    name="InnerRef to Ref Rename",
    description="Detects innerRef -> ref prop renames.",
    old=any_of(r"\binnerRef\s*[={]"),
    new=any_of(r"\bref\s*[={]"),
    old_label="innerRef",
    new_label="ref",
)

ALIGN_RIGHT_TO_END = rename_detector(
    id="align-right-to-end",
    name="AlignRight to AlignEnd Rename",
    description="Detects alignRight -> alignEnd prop renames.",
    old=any_of(r"\balignRight\b"),
    new=any_of(r"\balignEnd\b"),
    old_label="alignRight",
    new_label="alignEnd",
)

IS_ACTION_CELL = rename_detector(
    id="is-action-cell",
    name="IsActionCell to HasAction Rename",
    description="Detects isActionCell -> hasAction prop renames.",
    old=any_of(r"\bisActionCell\b"),
    new=any_of(r"\bhasAction\b"),
    old_label="isActionCell",
    new_label="hasAction",
)

OUIA_COMPONENT_ID = rename_detector(
    id="ouia-component-id",
    name="OUIA Component ID Rename",
    description="Detects data-ouia-component-id -> ouiaId renames.",
    old=any_of(r"\bdata-ouia-component-id\b"),
    new=any_of(r"\bouiaId\b"),
    old_label="data-ouia-component-id",
    new_label="ouiaId",
)

CHIPS_TO_LABELS = rename_detector(
    id="chips-to-labels",
    name="Chips to Labels Rename",
    description="Detects chips/deleteChip -> labels/deleteLabel renames.",
    old=any_of(r"\b(chips|deleteChip|Chip|ChipGroup)\b"),
    new=any_of(r"\b(labels|deleteLabel|Label|LabelGroup)\b"),
    old_label="chips/deleteChip",
    new_label="labels/deleteLabel",
)

SPLIT_BUTTON_ITEMS = rename_detector(
    id="split-button-items",
    name="SplitButton Options to Items Rename",
    description="Detects splitButtonOptions -> splitButtonItems renames.",
    old=any_of(r"\bsplitButtonOptions\b"),
    new=any_of(r"\bsplitButtonItems\b"),
    old_label="splitButtonOptions",
    new_label="splitButtonItems",
)

ALL_PROP_DETECTORS = [
    THEME_DARK_REMOVAL,
    SPACE_ITEMS_REMOVAL,
    INNER_REF_TO_REF,
    ALIGN_RIGHT_TO_END,
    IS_ACTION_CELL,
    OUIA_COMPONENT_ID,
    CHIPS_TO_LABELS,
    SPLIT_BUTTON_ITEMS,
]
