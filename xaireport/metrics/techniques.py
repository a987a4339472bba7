"""
Alternative XAI technique suggestions.
"""

import logging
import re
from types import MappingProxyType
from typing import Mapping

logger = logging.getLogger(__name__)

ALTERNATIVE_TECHNIQUES: Mapping[str, str] = MappingProxyType({
    "gradcam": "Grad-CAM++, Eigen-CAM, or Guided Grad-CAM",
    "gradcam++": "Eigen-CAM, LIME, or Integrated Gradients",
    "lime": "Grad-CAM, SHAP, or Kernel SHAP",
    "eigencam": "Grad-CAM, Grad-CAM++, or Guided Backpropagation",
    "guidedgradcam": "Eigen-CAM, LIME, or Integrated Gradients",
})

FALLBACK_SUGGESTION = "other gradient-based or perturbation-based methods"

_SEPARATORS = re.compile(r"[\s_\-]+")


def normalize_technique(technique: str) -> str:
    """
    Reduce a technique name to its lookup key.

    "Grad-CAM++" -> "gradcam++", "Guided Grad-CAM" -> "guidedgradcam"
    """
    return _SEPARATORS.sub("", technique.strip().lower())


def get_alternative_techniques(technique: str) -> str:
    """Suggest techniques to try instead of the given one."""
    key = normalize_technique(technique)
    suggestion = ALTERNATIVE_TECHNIQUES.get(key)
    if suggestion is None:
        logger.debug(f"No alternatives known for technique {technique!r}, using fallback")
        return FALLBACK_SUGGESTION
    return suggestion
