"""Component restructuring detectors: Text, EmptyState, Button, Avatar and Select."""

from __future__ import annotations

from typing import List, Optional

from diffgrade.analysis.models import StructuredView, TagUsage
from diffgrade.detectors.models import Detector, Verdict, correct, incorrect, missing
from diffgrade.detectors.shapes import LinePredicate, adds, all_of, any_of, removes
from diffgrade.git.models import ChangeRecord


def _renamed(record: ChangeRecord, old: LinePredicate, new: LinePredicate) -> bool:
    return removes(record, old) and adds(record, new)


# ---- text-content-consolidation ----

_TEXT_COMPONENTS = any_of(
    r"\b(TextContent|TextListItem|TextList|TextVariants|TextListVariants"
    r"|TextListItemVariants|TextProps)\b",
    r"\bText\b(?!Content|List|Variants|Props)",
)
_CONTENT_COMPONENT = any_of(
    r"\bContent\b(?!Variants|Props)",
    r"\b(Content|ContentVariants|ContentProps)\b",
)
_PROP_RENAMES = (
    ("isVisited", "isVisitedLink", any_of(r"\bisVisited\b"), any_of(r"\bisVisitedLink\b")),
    ("isPlain", "isPlainList", any_of(r"\bisPlain\b"), any_of(r"\bisPlainList\b")),
)


def _text_evaluate(golden: ChangeRecord, candidate: ChangeRecord) -> Verdict:
    removes_text = removes(candidate, _TEXT_COMPONENTS)
    adds_content = adds(candidate, _CONTENT_COMPONENT)

    if removes_text and adds_content:
        details = [
            f"Missing {old} -> {new} rename"
            for old, new, old_re, new_re in _PROP_RENAMES
            if _renamed(golden, old_re, new_re) and not _renamed(candidate, old_re, new_re)
        ]
        if details:
            return incorrect("Text components partially consolidated to Content", *details)
        return correct("Text/TextContent/TextList components correctly consolidated to Content")

    if removes_text:
        return incorrect("Text components removed but Content not added")
    return missing("Text->Content consolidation not found in candidate")


TEXT_CONTENT_CONSOLIDATION = Detector(
    id="text-content-consolidation",
    name="Text Content Consolidation",
    complexity="moderate",
    description=(
        "Detects consolidation of Text, TextContent, TextList and TextListItem "
        "into the Content component."
    ),
    subject="Text->Content consolidation",
    applies=lambda golden: _renamed(golden, _TEXT_COMPONENTS, _CONTENT_COMPONENT),
    evaluate=_text_evaluate,
)


# ---- empty-state-restructure ----

_EMPTY_STATE_CHILDREN = any_of(r"\bEmptyStateHeader\b", r"\bEmptyStateIcon\b")
_EMPTY_STATE_CHILD_IMPORT = all_of(r"\b(EmptyStateHeader|EmptyStateIcon)\b", r"import")
_TITLE_TEXT_PROP = any_of(r"\btitleText\b")


def _empty_state_applies(golden: ChangeRecord) -> bool:
    return removes(golden, _EMPTY_STATE_CHILDREN) or removes(golden, _EMPTY_STATE_CHILD_IMPORT)


def _empty_state_inspect(golden: StructuredView, candidate: StructuredView) -> Optional[Verdict]:
    if not (golden.has_tag("EmptyStateHeader") or golden.has_tag("EmptyStateIcon")):
        return None

    leftovers = [
        f"{tag} still used as child component"
        for tag in ("EmptyStateHeader", "EmptyStateIcon")
        if candidate.has_tag(tag)
    ]
    if leftovers:
        return incorrect("EmptyState partially restructured", *leftovers)

    empty_states = candidate.tags_named("EmptyState")
    if any(t.has_attribute("titleText") or t.has_attribute("icon") for t in empty_states):
        return correct("EmptyState children correctly restructured to props")
    return None


def _empty_state_evaluate(golden: ChangeRecord, candidate: ChangeRecord) -> Verdict:
    removes_children = _empty_state_applies(candidate)
    if removes_children and adds(candidate, _TITLE_TEXT_PROP):
        if adds(candidate, _EMPTY_STATE_CHILDREN):
            return incorrect("EmptyState partially restructured - still uses child components")
        return correct("EmptyState children correctly restructured to props")
    if removes_children:
        return incorrect("EmptyState children removed but props not properly added")
    return missing("EmptyState restructuring not found in candidate")


EMPTY_STATE_RESTRUCTURE = Detector(
    id="empty-state-restructure",
    name="EmptyState Restructure",
    complexity="moderate",
    description=(
        "Detects EmptyStateHeader/EmptyStateIcon children moving to EmptyState props."
    ),
    subject="EmptyState restructuring",
    applies=_empty_state_applies,
    evaluate=_empty_state_evaluate,
    inspect=_empty_state_inspect,
)


# ---- button-icon-prop ----

_BUTTON = any_of(r"\bButton\b")
_BUTTON_WITH_ICON_PROP = all_of(r"\bButton\b", r"\bicon\s*=\s*\{")
_PLAIN_BUTTON = all_of(
    r"\bButton\b", r"""variant\s*=\s*(?:"|'|\{['"])plain(?:"|'|\}|['"])"""
)


def _attribute_value(tag: TagUsage, name: str) -> str:
    attr = tag.attribute(name)
    if attr is None or attr.value is None:
        return ""
    return attr.value


def _button_inspect(golden: StructuredView, candidate: StructuredView) -> Optional[Verdict]:
    if not golden.has_tag("Button"):
        return None
    buttons = candidate.tags_named("Button")
    if any(b.has_attribute("icon") for b in buttons):
        return correct("Button icon correctly restructured to icon prop")
    if any("plain" in _attribute_value(b, "variant") for b in buttons):
        return incorrect("Button still uses children for icon instead of icon prop")
    return None


def _button_evaluate(golden: ChangeRecord, candidate: ChangeRecord) -> Verdict:
    if adds(candidate, _BUTTON_WITH_ICON_PROP):
        if removes(candidate, _BUTTON):
            return correct("Button icon correctly restructured to icon prop")
        return correct("Button icon prop added in candidate")
    if removes(candidate, _BUTTON) and adds(candidate, _PLAIN_BUTTON):
        return incorrect(
            "Button modified but icon still used as children",
            'Button variant="plain" exists but icon not moved to icon prop',
        )
    return missing("Button icon prop restructuring not found in candidate")


BUTTON_ICON_PROP = Detector(
    id="button-icon-prop",
    name="Button Icon Prop",
    complexity="moderate",
    description="Detects Button icons moving from children to the icon prop.",
    subject="Button icon prop changes",
    applies=lambda golden: _renamed(golden, _BUTTON, _BUTTON_WITH_ICON_PROP),
    evaluate=_button_evaluate,
    inspect=_button_inspect,
)


# ---- avatar-adoption ----

_AVATAR = any_of(r"\bAvatar\b")
_AVATAR_PROPS = (
    ("isBordered", any_of(r"\bisBordered\b")),
    ("size", any_of(r"""\bsize\s*=\s*(?:\{|"|')""")),
)


def _avatar_applies(record: ChangeRecord) -> bool:
    return removes(record, _AVATAR) or adds(record, _AVATAR)


def _avatar_inspect(golden: StructuredView, candidate: StructuredView) -> Optional[Verdict]:
    golden_avatars = golden.tags_named("Avatar")
    if not golden_avatars:
        return None
    candidate_avatars = candidate.tags_named("Avatar")
    if not candidate_avatars:
        return missing("Avatar component not found in candidate")

    def has_new_props(tags) -> bool:
        return any(t.has_attribute(name) for t in tags for name, _ in _AVATAR_PROPS)

    if not has_new_props(golden_avatars):
        return None
    if has_new_props(candidate_avatars):
        return correct("Avatar component correctly adopted with new props")
    return incorrect(
        "Avatar component present but missing new props",
        "Avatar missing isBordered or size props from golden",
    )


def _avatar_lines_with(record: ChangeRecord, predicate: LinePredicate) -> bool:
    return any(_AVATAR(l.content) and predicate(l.content) for l in record.added_lines)


def _avatar_evaluate(golden: ChangeRecord, candidate: ChangeRecord) -> Verdict:
    if not _avatar_applies(candidate):
        return missing("Avatar component changes not found in candidate")

    details: List[str] = [
        f"Missing {name} prop on Avatar"
        for name, predicate in _AVATAR_PROPS
        if _avatar_lines_with(golden, predicate) and not _avatar_lines_with(candidate, predicate)
    ]
    if details:
        return incorrect("Avatar partially migrated - missing new props", *details)
    return correct("Avatar component correctly adopted")


AVATAR_ADOPTION = Detector(
    id="avatar-adoption",
    name="Avatar Adoption",
    complexity="moderate",
    description="Detects Avatar component prop changes (isBordered, size).",
    subject="Avatar component changes",
    applies=_avatar_applies,
    evaluate=_avatar_evaluate,
    inspect=_avatar_inspect,
)


# ---- select-rewrite ----

_SELECT = any_of(r"\bSelect\b(?!Option|List|Group|Variant)")
_OLD_SELECT_PROPS = ("onToggle", "isOpen", "selections", "placeholderText")
_OLD_SELECT_PROP_RES = {name: any_of(rf"\b{name}\b") for name in _OLD_SELECT_PROPS}
_OLD_SELECT_API = any_of(*(rf"\b{name}\b" for name in _OLD_SELECT_PROPS), r"\bSelectVariant\b")
_NEW_SELECT_API = any_of(
    r"\bMenuToggle\b", r"\bSelectList\b", r"\btoggle\s*=\s*\{", r"\bonOpenChange\b"
)


def _select_applies(golden: ChangeRecord) -> bool:
    uses_select = removes(golden, _SELECT) or adds(golden, _SELECT)
    return uses_select and (removes(golden, _OLD_SELECT_API) or adds(golden, _NEW_SELECT_API))


def _old_select_props(view: StructuredView) -> List[str]:
    seen: List[str] = []
    for tag in view.tags_named("Select"):
        for attr in tag.attributes:
            if attr.name in _OLD_SELECT_PROPS and attr.name not in seen:
                seen.append(attr.name)
    return seen


def _select_inspect(golden: StructuredView, candidate: StructuredView) -> Optional[Verdict]:
    if not _old_select_props(golden):
        return None

    leftover = _old_select_props(candidate)
    if leftover:
        return incorrect(
            "Select partially rewritten - still uses the old API props",
            f"Old Select props still present: {', '.join(leftover)}",
        )
    if (
        candidate.has_tag("MenuToggle")
        or candidate.has_tag("SelectList")
        or any(t.has_attribute("toggle") for t in candidate.tags_named("Select"))
    ):
        return correct("Select correctly rewritten to the new API")
    return None


def _select_evaluate(golden: ChangeRecord, candidate: ChangeRecord) -> Verdict:
    removes_old = removes(candidate, _OLD_SELECT_API)
    adds_new = adds(candidate, _NEW_SELECT_API)

    if adds(candidate, _OLD_SELECT_API) and not adds_new:
        details = [
            f"{name} prop still used (old API)"
            for name, predicate in _OLD_SELECT_PROP_RES.items()
            if adds(candidate, predicate)
        ]
        return incorrect("Select partially rewritten - still uses the old API", *details)

    if removes_old and adds_new:
        return correct("Select correctly rewritten to the new API")
    if adds_new:
        return correct("Select rewritten to use the new API components")
    if removes_old:
        return incorrect(
            "Select old API removed but the new API not properly added",
            "Old Select props removed but MenuToggle/SelectList not introduced",
        )
    return missing("Select rewrite not found in candidate")


SELECT_REWRITE = Detector(
    id="select-rewrite",
    name="Select Rewrite",
    complexity="complex",
    description=(
        "Detects the Select rewrite from onToggle/isOpen/selections props "
        "to MenuToggle, SelectList and the toggle prop."
    ),
    subject="Select component rewrite",
    applies=_select_applies,
    evaluate=_select_evaluate,
    inspect=_select_inspect,
)

ALL_COMPONENT_DETECTORS = [
    TEXT_CONTENT_CONSOLIDATION,
    EMPTY_STATE_RESTRUCTURE,
    BUTTON_ICON_PROP,
    AVATAR_ADOPTION,
    SELECT_REWRITE,
]
