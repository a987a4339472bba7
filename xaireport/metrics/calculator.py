"""
Geometry metrics for comparing two bounding boxes.
Computes areas, area difference, center distance and IoU.
"""

import logging
from typing import Optional, Tuple

import numpy as np

from xaireport.core.types import BoundingBox, BoxMetrics

logger = logging.getLogger(__name__)


class MetricsCalculator:
    """
    Calculates discrepancy metrics between a ground-truth box and an
    XAI-generated box.

    Supports:
    - Area (absolute, corner order does not matter)
    - Area difference and percentage of ground-truth area
    - Center point distance
    - Intersection over Union
    """

    def area(self, box: BoundingBox) -> float:
        return float(np.abs((box.x2 - box.x1) * (box.y2 - box.y1)))

    def center(self, box: BoundingBox) -> Tuple[float, float]:
        return ((box.x1 + box.x2) / 2, (box.y1 + box.y2) / 2)

    def center_distance(self, a: BoundingBox, b: BoundingBox) -> float:
        """Euclidean distance between box centers."""
        ax, ay = self.center(a)
        bx, by = self.center(b)
        return float(np.hypot(ax - bx, ay - by))

    def area_diff_pct(self, gt_area: float, xai_area: float) -> Optional[float]:
        """
        Area difference as a percentage of the ground-truth area.

        Returns:
            None when the ground-truth area is zero or the result is not finite
        """
        if gt_area == 0:
            return None
        pct = abs(gt_area - xai_area) / gt_area * 100
        return float(pct) if np.isfinite(pct) else None

    def iou(self, a: BoundingBox, b: BoundingBox) -> float:
        """
        Intersection over Union.

        Corners are normalized first so reversed boxes compare correctly.
        Two zero-area boxes have an IoU of 0.
        """
        ax1, ax2 = sorted((a.x1, a.x2))
        ay1, ay2 = sorted((a.y1, a.y2))
        bx1, bx2 = sorted((b.x1, b.x2))
        by1, by2 = sorted((b.y1, b.y2))

        iw = max(0.0, min(ax2, bx2) - max(ax1, bx1))
        ih = max(0.0, min(ay2, by2) - max(ay1, by1))
        inter = iw * ih
        union = self.area(a) + self.area(b) - inter
        if union <= 0:
            return 0.0
        return float(inter / union)

    def calculate_all(self, ground_truth: BoundingBox, xai_generated: BoundingBox) -> BoxMetrics:
        """
        Calculate all metrics.

        Args:
            ground_truth: Annotated box
            xai_generated: Box derived from the XAI explanation

        Returns:
            BoxMetrics for the pair
        """
        gt_area = self.area(ground_truth)
        xai_area = self.area(xai_generated)

        pct = self.area_diff_pct(gt_area, xai_area)
        if pct is None:
            logger.warning("Ground truth box has zero area; area difference percentage is undefined")

        return BoxMetrics(
            gt_area=gt_area,
            xai_area=xai_area,
            area_diff=abs(gt_area - xai_area),
            area_diff_pct=pct,
            gt_center=self.center(ground_truth),
            xai_center=self.center(xai_generated),
            center_distance=self.center_distance(ground_truth, xai_generated),
            iou=self.iou(ground_truth, xai_generated),
        )
