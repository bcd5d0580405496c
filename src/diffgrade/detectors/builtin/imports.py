"""Import-path detectors."""

from __future__ import annotations

from typing import List

from diffgrade.detectors.models import Detector, Verdict, correct, incorrect, missing
from diffgrade.detectors.shapes import adds, all_of, any_of, removes, rename_detector
from diffgrade.git.models import ChangeRecord

_MODAL = r"\bModal\b"
_REACT_CORE = r"""from\s+['"]@patternfly/react-core['"]"""
_REACT_CORE_DEPRECATED = r"""from\s+['"]@patternfly/react-core/deprecated['"]"""

MODAL_IMPORT_PATH = rename_detector(
    id="modal-import-path",
    name="Modal Import Path Change",
    description="Detects Modal moving from @patternfly/react-core to the deprecated entry point.",
    old=all_of(_MODAL, _REACT_CORE),
    new=all_of(_MODAL, _REACT_CORE_DEPRECATED),
    old_label="Modal main import",
    new_label="deprecated Modal import",
    subject="Modal import path change",
    correct_message="Modal import correctly moved to deprecated path",
    incorrect_message="Modal removed from main import but not added to deprecated path",
    missing_message="Modal import path change not found in candidate",
)


# ---- react-tokens / icons ----

_OLD_TOKENS_OR_ICONS = any_of(
    r"""from\s+['"]@patternfly/react-tokens['"]""",
    r"\bglobal_",
    r"""from\s+['"]@patternfly/react-icons/dist/(?:js|esm)/icons\b""",
    r"""from\s+['"]@patternfly/react-icons/dist\b""",
)
_NEW_TOKENS_OR_ICONS = any_of(
    r"""from\s+['"]@patternfly/react-tokens/dist\b""",
    r"\bt_",
    r"""from\s+['"]@patternfly/react-icons\b""",
)


def _tokens_applies(golden: ChangeRecord) -> bool:
    return removes(golden, _OLD_TOKENS_OR_ICONS) or adds(golden, _NEW_TOKENS_OR_ICONS)


def _tokens_evaluate(golden: ChangeRecord, candidate: ChangeRecord) -> Verdict:
    removes_old = removes(candidate, _OLD_TOKENS_OR_ICONS)
    adds_new = adds(candidate, _NEW_TOKENS_OR_ICONS)
    if not removes_old and not adds_new:
        return missing("react-tokens/icon/status import changes not found in candidate")

    details: List[str] = []
    if adds(golden, _NEW_TOKENS_OR_ICONS) and removes_old and not adds_new:
        details.append("Old import paths removed but new import paths not added")
    if adds(candidate, _OLD_TOKENS_OR_ICONS):
        details.append("Old react-tokens/icon import paths re-added in candidate")

    if details:
        return incorrect("react-tokens/icon/status imports partially migrated", *details)
    return correct("react-tokens/icon/status imports correctly updated")


REACT_TOKENS_ICON_STATUS = Detector(
    id="react-tokens-icon-status",
    name="React Tokens/Icon/Status",
    complexity="moderate",
    description="Detects react-tokens and icon/status import path changes.",
    subject="react-tokens or icon/status import changes",
    applies=_tokens_applies,
    evaluate=_tokens_evaluate,
)

ALL_IMPORT_DETECTORS = [MODAL_IMPORT_PATH, REACT_TOKENS_ICON_STATUS]
