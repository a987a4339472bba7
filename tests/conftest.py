"""Shared fixtures."""

import pytest

from xaireport.core.types import (
    AnalysisMetadata,
    AnalysisRequest,
    BoundingBox,
    ImagePayload,
)

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 16


def make_request(
    gt=(0.0, 0.0, 10.0, 10.0),
    xai=(5.0, 5.0, 15.0, 15.0),
    technique="gradcam",
    architecture="ResNet-50",
    dataset="PASCAL-VOC",
    with_image=True,
) -> AnalysisRequest:
    """Create a request with sensible defaults."""
    return AnalysisRequest(
        ground_truth=BoundingBox(*gt),
        xai_generated=BoundingBox(*xai),
        metadata=AnalysisMetadata(
            xai_technique=technique,
            model_architecture=architecture,
            dataset=dataset,
        ),
        heatmap_image=ImagePayload(PNG_BYTES, "image/png", "heatmap.png") if with_image else None,
        prompt="Analyze the discrepancy.",
    )


@pytest.fixture
def request_fields():
    """Raw form values for a complete submission."""
    return {
        "prompt": "Analyze the discrepancy.",
        "gt_x1": "0", "gt_y1": "0", "gt_x2": "10", "gt_y2": "10",
        "xai_x1": "5", "xai_y1": "5", "xai_x2": "15", "xai_y2": "15",
        "xai_technique": "gradcam",
        "model_architecture": "ResNet-50",
        "dataset": "PASCAL-VOC",
    }


@pytest.fixture
def png_image():
    return ImagePayload(PNG_BYTES, "image/png", "original.png")
