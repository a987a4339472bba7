"""
Validation of raw form input before a report is generated.
"""

import logging
import math
from typing import Any, Dict, List, Mapping, Optional

from .config import DEFAULT_MAX_IMAGE_BYTES
from .exceptions import InvalidFieldError, InvalidImageError, MissingFieldError
from .types import AnalysisMetadata, AnalysisRequest, BoundingBox, ImagePayload

logger = logging.getLogger(__name__)

GT_FIELDS = ["gt_x1", "gt_y1", "gt_x2", "gt_y2"]
XAI_FIELDS = ["xai_x1", "xai_y1", "xai_x2", "xai_y2"]
COORDINATE_FIELDS = GT_FIELDS + XAI_FIELDS
METADATA_FIELDS = ["xai_technique", "model_architecture", "dataset"]


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ""
    return False


def validate_request_fields(
    fields: Mapping[str, Any],
    original_image: Optional[ImagePayload] = None,
    heatmap_image: Optional[ImagePayload] = None,
    require_prompt: bool = False,
) -> None:
    """
    Check that every required value is present.

    At least one of the two images must be supplied.

    Args:
        fields: Raw form values keyed by field name
        original_image: Uploaded source image
        heatmap_image: Uploaded XAI heatmap
        require_prompt: Also require a non-blank "prompt" value

    Raises:
        MissingFieldError: Listing every absent field
    """
    required = COORDINATE_FIELDS + METADATA_FIELDS
    if require_prompt:
        required = ["prompt"] + required

    missing = [name for name in required if _is_blank(fields.get(name))]
    if original_image is None and heatmap_image is None:
        missing.append("image")

    if missing:
        logger.debug(f"Validation failed, missing: {missing}")
        raise MissingFieldError(missing)


def parse_coordinate(name: str, value: Any) -> float:
    """
    Convert a raw coordinate value to float.

    Raises:
        MissingFieldError: If the value is blank
        InvalidFieldError: If the value is not a finite number
    """
    if _is_blank(value):
        raise MissingFieldError([name])
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise InvalidFieldError(name, value) from None
    if not math.isfinite(number):
        raise InvalidFieldError(name, value)
    return number


def is_negative_coordinate(value: Any) -> bool:
    """
    True for values that parse to a negative number.

    Negative coordinates are allowed but flagged to the user.
    """
    try:
        return float(value) < 0
    except (TypeError, ValueError):
        return False


def negative_coordinates(fields: Mapping[str, Any]) -> List[str]:
    """Names of coordinate fields holding negative values."""
    return [name for name in COORDINATE_FIELDS if is_negative_coordinate(fields.get(name))]


def validate_image(
    image: ImagePayload,
    max_bytes: int = DEFAULT_MAX_IMAGE_BYTES,
) -> ImagePayload:
    """
    Reject non-image uploads and uploads larger than max_bytes.

    Returns:
        The image unchanged, for chaining

    Raises:
        InvalidImageError: With the message to show the user
    """
    if not image.is_image:
        raise InvalidImageError("Please select a valid image file")
    if image.size > max_bytes:
        raise InvalidImageError(
            f"Image size must be less than {max_bytes // (1024 * 1024)}MB"
        )
    return image


def build_request(
    fields: Mapping[str, Any],
    original_image: Optional[ImagePayload] = None,
    heatmap_image: Optional[ImagePayload] = None,
    require_prompt: bool = False,
) -> AnalysisRequest:
    """
    Validate raw form values and assemble an AnalysisRequest.

    Raises:
        MissingFieldError: If a required value or both images are absent
        InvalidFieldError: If a coordinate is not a finite number
    """
    validate_request_fields(fields, original_image, heatmap_image, require_prompt)

    coords: Dict[str, float] = {
        name: parse_coordinate(name, fields[name]) for name in COORDINATE_FIELDS
    }

    flagged = negative_coordinates(fields)
    if flagged:
        logger.warning(f"Negative coordinates in request: {', '.join(flagged)}")

    return AnalysisRequest(
        ground_truth=BoundingBox(*(coords[name] for name in GT_FIELDS)),
        xai_generated=BoundingBox(*(coords[name] for name in XAI_FIELDS)),
        metadata=AnalysisMetadata(
            xai_technique=str(fields["xai_technique"]).strip(),
            model_architecture=str(fields["model_architecture"]).strip(),
            dataset=str(fields["dataset"]).strip(),
        ),
        original_image=original_image,
        heatmap_image=heatmap_image,
        prompt=str(fields.get("prompt") or "").strip(),
    )
