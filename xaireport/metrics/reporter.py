"""
Report generation for bounding-box discrepancy analysis.
Renders the fixed Markdown report and tabular comparisons.
"""

import logging
import math
from decimal import Decimal
from typing import Any, Dict, Mapping, Optional

from xaireport.core.types import AnalysisReport, AnalysisRequest, BoxMetrics
from .calculator import MetricsCalculator
from .techniques import get_alternative_techniques

logger = logging.getLogger(__name__)

UNDEFINED = "undefined"

REPORT_TEMPLATE = """# XAI Analysis Report

## Executive Summary
Analysis of {technique} performance on {dataset} using {architecture} architecture.

## Quantitative Analysis

### Bounding Box Metrics
- **Ground Truth Area**: {gt_area} square units
- **XAI Generated Area**: {xai_area} square units
- **Area Difference**: {area_diff} square units ({area_diff_pct} difference)
- **Center Point Distance**: {center_distance} units

### Coordinate Comparison
**Ground Truth**: ({gt_x1}, {gt_y1}) to ({gt_x2}, {gt_y2})
**XAI Generated**: ({xai_x1}, {xai_y1}) to ({xai_x2}, {xai_y2})

## Qualitative Analysis

### Potential Discrepancy Factors

1. **XAI Technique Limitations**
   - {technique} may struggle with complex spatial relationships
   - Gradient-based methods can be sensitive to model architecture choices
   - Localization accuracy varies based on feature map resolution

2. **Model Architecture Impact**
   - {architecture} architecture characteristics affect XAI performance
   - Different layer structures produce varying quality explanations
   - Skip connections and residual blocks influence gradient flow

3. **Dataset-Specific Considerations**
   - {dataset} characteristics may affect XAI technique effectiveness
   - Image resolution and annotation quality impact results
   - Domain-specific features may not be well-captured by current XAI methods

## Technical Recommendations

### Immediate Improvements
1. **Try Alternative XAI Techniques**
   - Consider {alternatives}
   - Experiment with ensemble methods combining multiple XAI approaches

2. **Model Architecture Adjustments**
   - Fine-tune attention mechanisms for better localization
   - Consider adding auxiliary tasks for improved feature learning
   - Implement multi-scale feature fusion

3. **Preprocessing Enhancements**
   - Normalize input images consistently
   - Apply data augmentation techniques
   - Consider resolution-specific preprocessing

### Long-term Strategies
1. **Research Directions**
   - Investigate attention-based XAI methods
   - Explore self-supervised learning for better feature representations
   - Consider developing domain-specific XAI techniques

2. **Evaluation Framework**
   - Implement comprehensive evaluation metrics
   - Create benchmark datasets for XAI performance
   - Develop automated quality assessment tools

## Conclusion
The observed discrepancy ({area_diff_pct} area difference) suggests that while {technique} provides useful insights, there's room for improvement in localization accuracy. The {center_distance} unit center distance indicates moderate spatial alignment issues that should be addressed through the recommended improvements.

**Next Steps**: Implement the suggested alternative techniques and architectural modifications to improve XAI performance and achieve better alignment with ground truth annotations."""


def format_coordinate(value: float) -> str:
    """
    Print a coordinate the way a browser prints a number.

    Shortest round-trip digits, no trailing ".0", and exponent notation
    only below 1e-6 or from 1e21 up:
    10.0 -> "10", 10.5 -> "10.5", 1e-7 -> "1e-7", 1e21 -> "1e+21"
    """
    value = float(value)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0:
        return "0"

    sign = "-" if value < 0 else ""
    _, digit_tuple, exponent = Decimal(repr(abs(value))).normalize().as_tuple()
    digits = "".join(str(d) for d in digit_tuple)
    k = len(digits)
    # Position of the decimal point relative to the first digit
    n = k + exponent

    if k <= n <= 21:
        return sign + digits + "0" * (n - k)
    if 0 < n <= 21:
        return sign + digits[:n] + "." + digits[n:]
    if -6 < n <= 0:
        return sign + "0." + "0" * -n + digits

    e = n - 1
    mantissa = digits if k == 1 else digits[0] + "." + digits[1:]
    return f"{sign}{mantissa}e{'+' if e >= 0 else '-'}{abs(e)}"


def format_percent(pct: Optional[float]) -> str:
    """One decimal place with a percent sign, or "undefined"."""
    if pct is None:
        return UNDEFINED
    return f"{pct:.1f}%"


class Reporter:
    """
    Generates formatted reports from analysis requests.

    Supports:
    - Full Markdown report
    - JSON-serializable report dict
    - Side-by-side comparison of several requests
    """

    def __init__(self, calculator: Optional[MetricsCalculator] = None):
        """
        Initialize reporter.

        Args:
            calculator: MetricsCalculator to use (creates new one if not provided)
        """
        self.calculator = calculator or MetricsCalculator()

    def calculate_metrics(self, request: AnalysisRequest) -> BoxMetrics:
        return self.calculator.calculate_all(request.ground_truth, request.xai_generated)

    def generate_report(self, request: AnalysisRequest) -> AnalysisReport:
        """
        Render the analysis report for a request.

        Pure function of the request: images are not read and the same
        request always yields the same text. A zero-area ground truth
        prints "undefined" instead of a percentage.

        Args:
            request: AnalysisRequest to report on

        Returns:
            Report text in Markdown
        """
        metrics = self.calculate_metrics(request)
        meta = request.metadata
        gt = request.ground_truth
        xai = request.xai_generated

        return REPORT_TEMPLATE.format(
            technique=meta.xai_technique,
            architecture=meta.model_architecture,
            dataset=meta.dataset,
            gt_area=f"{metrics.gt_area:.2f}",
            xai_area=f"{metrics.xai_area:.2f}",
            area_diff=f"{metrics.area_diff:.2f}",
            area_diff_pct=format_percent(metrics.area_diff_pct),
            center_distance=f"{metrics.center_distance:.2f}",
            gt_x1=format_coordinate(gt.x1),
            gt_y1=format_coordinate(gt.y1),
            gt_x2=format_coordinate(gt.x2),
            gt_y2=format_coordinate(gt.y2),
            xai_x1=format_coordinate(xai.x1),
            xai_y1=format_coordinate(xai.y1),
            xai_x2=format_coordinate(xai.x2),
            xai_y2=format_coordinate(xai.y2),
            alternatives=get_alternative_techniques(meta.xai_technique),
        )

    def generate_report_dict(self, request: AnalysisRequest) -> Dict[str, Any]:
        """
        Generate a dictionary report suitable for JSON serialization.

        Images are left out; only their presence is recorded.

        Args:
            request: AnalysisRequest

        Returns:
            Dict with all report data
        """
        metrics = self.calculate_metrics(request)
        return {
            "metadata": request.metadata.to_dict(),
            "groundTruth": request.ground_truth.to_dict(),
            "xaiGenerated": request.xai_generated.to_dict(),
            "images": {
                "original": request.original_image is not None,
                "heatmap": request.heatmap_image is not None,
            },
            "metrics": metrics.to_dict(),
            "alternatives": get_alternative_techniques(request.metadata.xai_technique),
            "report": self.generate_report(request),
        }

    def compare_requests(self, requests: Mapping[str, AnalysisRequest]) -> str:
        """
        Build a comparison table across several requests.

        Args:
            requests: Dict mapping a label to its AnalysisRequest

        Returns:
            Table text, one row per request in label order
        """
        lines = [
            "=" * 96,
            "BOUNDING BOX COMPARISON",
            "=" * 96,
            (
                f"{'Name':<20} {'Technique':<16} {'GT Area':>10} {'XAI Area':>10} "
                f"{'AreaDiff%':>10} {'CenterDist':>11} {'IoU':>7}"
            ),
            "-" * 96,
        ]

        for name, request in sorted(requests.items()):
            m = self.calculate_metrics(request)
            pct = f"{m.area_diff_pct:.1f}" if m.area_diff_pct is not None else UNDEFINED
            lines.append(
                f"{name:<20} {request.metadata.xai_technique:<16} "
                f"{m.gt_area:>10.2f} {m.xai_area:>10.2f} {pct:>10} "
                f"{m.center_distance:>11.2f} {m.iou:>7.3f}"
            )

        lines.append("=" * 96)
        return "\n".join(lines)

    def print_comparison(self, requests: Mapping[str, AnalysisRequest]) -> None:
        print("\n" + self.compare_requests(requests) + "\n")


def generate_report(request: AnalysisRequest) -> AnalysisReport:
    """Render the analysis report with a default Reporter."""
    return Reporter().generate_report(request)
