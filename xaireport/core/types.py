"""
Core data types for bounding-box analysis requests and results.
"""

import base64
import binascii
import mimetypes
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

# The report itself is plain text.
AnalysisReport = str


class NotificationLevel(Enum):
    """Severity of a user-facing notification."""
    SUCCESS = "success"
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


@dataclass(frozen=True)
class BoundingBox:
    """
    Axis-aligned box given by two opposite corners.

    Corner order is not enforced: x2 may be less than x1, in which case
    width is negative but area stays positive.
    """
    x1: float
    y1: float
    x2: float
    y2: float

    @property
    def width(self) -> float:
        return self.x2 - self.x1

    @property
    def height(self) -> float:
        return self.y2 - self.y1

    @property
    def area(self) -> float:
        return abs(self.width * self.height)

    @property
    def center(self) -> Tuple[float, float]:
        return ((self.x1 + self.x2) / 2, (self.y1 + self.y2) / 2)

    @property
    def is_degenerate(self) -> bool:
        """True when the box encloses no area."""
        return self.area == 0

    def as_tuple(self) -> Tuple[float, float, float, float]:
        return (self.x1, self.y1, self.x2, self.y2)

    def to_dict(self) -> Dict[str, float]:
        return {"x1": self.x1, "y1": self.y1, "x2": self.x2, "y2": self.y2}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BoundingBox":
        return cls(
            x1=float(data["x1"]),
            y1=float(data["y1"]),
            x2=float(data["x2"]),
            y2=float(data["y2"]),
        )


@dataclass(frozen=True)
class AnalysisMetadata:
    """Free-form labels describing where the XAI box came from."""
    xai_technique: str
    model_architecture: str
    dataset: str

    def to_dict(self) -> Dict[str, str]:
        return {
            "xaiTechnique": self.xai_technique,
            "modelArchitecture": self.model_architecture,
            "dataset": self.dataset,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AnalysisMetadata":
        return cls(
            xai_technique=str(data["xaiTechnique"]),
            model_architecture=str(data["modelArchitecture"]),
            dataset=str(data["dataset"]),
        )


@dataclass(frozen=True)
class ImagePayload:
    """
    Opaque image upload.

    The bytes are carried along with the request but never decoded.
    """
    data: bytes = field(repr=False)
    mime_type: str = "application/octet-stream"
    name: Optional[str] = None

    @property
    def size(self) -> int:
        return len(self.data)

    @property
    def is_image(self) -> bool:
        return self.mime_type.startswith("image/")

    def to_data_url(self) -> str:
        encoded = base64.b64encode(self.data).decode("ascii")
        return f"data:{self.mime_type};base64,{encoded}"

    @classmethod
    def from_data_url(cls, url: str, name: Optional[str] = None) -> "ImagePayload":
        """
        Parse a base64 ``data:`` URL.

        Raises:
            ValueError: If the URL is not a base64 data URL
        """
        if not url.startswith("data:") or "," not in url:
            raise ValueError("Not a data URL")

        header, payload = url[5:].split(",", 1)
        parts = header.split(";")
        if "base64" not in parts[1:]:
            raise ValueError("Only base64 data URLs are supported")

        try:
            data = base64.b64decode(payload, validate=True)
        except binascii.Error as e:
            raise ValueError(f"Invalid base64 payload: {e}") from e

        return cls(data=data, mime_type=parts[0] or "text/plain", name=name)

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "ImagePayload":
        """Read an image file; the MIME type is guessed from its extension."""
        path = Path(path)
        mime_type, _ = mimetypes.guess_type(path.name)
        return cls(
            data=path.read_bytes(),
            mime_type=mime_type or "application/octet-stream",
            name=path.name,
        )


@dataclass(frozen=True)
class AnalysisRequest:
    """Everything needed to produce one discrepancy report."""
    ground_truth: BoundingBox
    xai_generated: BoundingBox
    metadata: AnalysisMetadata
    original_image: Optional[ImagePayload] = None
    heatmap_image: Optional[ImagePayload] = None
    prompt: str = ""

    @property
    def has_images(self) -> bool:
        return self.original_image is not None or self.heatmap_image is not None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to a JSON-compatible document (images as data URLs)."""
        return {
            "prompt": self.prompt,
            "groundTruth": self.ground_truth.to_dict(),
            "xaiGenerated": self.xai_generated.to_dict(),
            "metadata": self.metadata.to_dict(),
            "images": {
                "original": self.original_image.to_data_url() if self.original_image else None,
                "heatmap": self.heatmap_image.to_data_url() if self.heatmap_image else None,
            },
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AnalysisRequest":
        images = data.get("images") or {}
        original = images.get("original")
        heatmap = images.get("heatmap")
        return cls(
            ground_truth=BoundingBox.from_dict(data["groundTruth"]),
            xai_generated=BoundingBox.from_dict(data["xaiGenerated"]),
            metadata=AnalysisMetadata.from_dict(data["metadata"]),
            original_image=ImagePayload.from_data_url(original, "original") if original else None,
            heatmap_image=ImagePayload.from_data_url(heatmap, "heatmap") if heatmap else None,
            prompt=data.get("prompt", ""),
        )


@dataclass(frozen=True)
class BoxMetrics:
    """Geometric comparison of a ground-truth box and an XAI box."""
    gt_area: float
    xai_area: float
    area_diff: float
    area_diff_pct: Optional[float]  # None when ground-truth area is zero
    gt_center: Tuple[float, float]
    xai_center: Tuple[float, float]
    center_distance: float
    iou: float

    @property
    def is_degenerate(self) -> bool:
        return self.area_diff_pct is None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "gt_area": self.gt_area,
            "xai_area": self.xai_area,
            "area_diff": self.area_diff,
            "area_diff_pct": self.area_diff_pct,
            "gt_center": list(self.gt_center),
            "xai_center": list(self.xai_center),
            "center_distance": self.center_distance,
            "iou": self.iou,
        }


@dataclass(frozen=True)
class Notification:
    """Transient message shown to the user after an action."""
    level: NotificationLevel
    message: str


@dataclass(frozen=True)
class AnalysisOutcome:
    """Result of one submission: the text to display plus a notification."""
    success: bool
    report: AnalysisReport
    notification: Notification
