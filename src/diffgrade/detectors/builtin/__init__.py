"""Built-in detectors — aggregate all categories."""

from diffgrade.detectors.builtin.components import ALL_COMPONENT_DETECTORS
from diffgrade.detectors.builtin.css import ALL_CSS_DETECTORS
from diffgrade.detectors.builtin.imports import ALL_IMPORT_DETECTORS
from diffgrade.detectors.builtin.layout import ALL_LAYOUT_DETECTORS
from diffgrade.detectors.builtin.props import ALL_PROP_DETECTORS
from diffgrade.detectors.builtin.selectors import ALL_SELECTOR_DETECTORS
from diffgrade.detectors.models import Detector

ALL_BUILTIN_DETECTORS: list[Detector] = [
    *ALL_CSS_DETECTORS,
    *ALL_PROP_DETECTORS,
    *ALL_IMPORT_DETECTORS,
    *ALL_LAYOUT_DETECTORS,
    *ALL_COMPONENT_DETECTORS,
    *ALL_SELECTOR_DETECTORS,
]

__all__ = ["ALL_BUILTIN_DETECTORS"]
