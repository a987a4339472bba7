"""Tests for report generation."""

import json

import pytest

from xaireport.metrics.reporter import (
    Reporter,
    format_coordinate,
    format_percent,
    generate_report,
)

from conftest import make_request

SECTIONS = [
    "# XAI Analysis Report",
    "## Executive Summary",
    "## Quantitative Analysis",
    "## Qualitative Analysis",
    "## Technical Recommendations",
    "## Conclusion",
]


class TestFormatting:
    """Tests for number formatting helpers."""

    @pytest.mark.parametrize("value, text", [
        (10.0, "10"),
        (0.0, "0"),
        (-3.0, "-3"),
        (10.5, "10.5"),
        (0.1, "0.1"),
        (-0.0, "0"),
        (-2.75, "-2.75"),
        (0.000001, "0.000001"),
        (1e-7, "1e-7"),
        (1.5e-7, "1.5e-7"),
        (1e20, "100000000000000000000"),
        (1e21, "1e+21"),
        (-1.25e22, "-1.25e+22"),
    ])
    def test_format_coordinate(self, value, text):
        assert format_coordinate(value) == text

    def test_format_percent(self):
        assert format_percent(12.345) == "12.3%"
        assert format_percent(0.0) == "0.0%"
        assert format_percent(None) == "undefined"


class TestReporter:
    """Tests for Reporter class."""

    def test_sections_in_order(self):
        """Test that all report sections appear in order."""
        report = Reporter().generate_report(make_request())

        positions = [report.index(s) for s in SECTIONS]
        assert positions == sorted(positions)

    def test_reference_metrics(self):
        """Test metric lines for the offset 10x10 boxes."""
        report = Reporter().generate_report(make_request())

        assert "- **Ground Truth Area**: 100.00 square units" in report
        assert "- **XAI Generated Area**: 100.00 square units" in report
        assert "- **Area Difference**: 0.00 square units (0.0% difference)" in report
        assert "- **Center Point Distance**: 7.07 units" in report
        assert "**Ground Truth**: (0, 0) to (10, 10)" in report
        assert "**XAI Generated**: (5, 5) to (15, 15)" in report
        assert "The observed discrepancy (0.0% area difference)" in report
        assert "The 7.07 unit center distance" in report

    def test_metadata_interpolated(self):
        report = Reporter().generate_report(
            make_request(technique="lime", architecture="U-Net", dataset="ISIC 2018")
        )

        assert "Analysis of lime performance on ISIC 2018 using U-Net architecture." in report
        assert "   - U-Net architecture characteristics affect XAI performance" in report
        assert "   - Consider Grad-CAM, SHAP, or Kernel SHAP" in report

    def test_percentage_one_decimal(self):
        """Test percentage formatting with a non-trivial ratio."""
        report = Reporter().generate_report(
            make_request(gt=(0, 0, 3, 3), xai=(0, 0, 4, 4))
        )

        # |9 - 16| / 9 = 77.77...%
        assert "7.00 square units (77.8% difference)" in report

    def test_degenerate_ground_truth(self):
        """Test that zero-area ground truth reports undefined, never inf/nan."""
        report = Reporter().generate_report(make_request(gt=(0, 0, 0, 0)))

        assert "(undefined difference)" in report
        assert "(undefined area difference)" in report
        for token in ("inf%", "nan%", "Infinity", "NaN"):
            assert token not in report

    def test_extreme_coordinates(self):
        """Test exponent notation in the coordinate comparison."""
        report = Reporter().generate_report(make_request(gt=(1e-7, 0, 1e21, 2)))
        assert "**Ground Truth**: (1e-7, 0) to (1e+21, 2)" in report

    def test_unknown_technique_fallback(self):
        report = Reporter().generate_report(make_request(technique="unknown-technique"))
        assert "Consider other gradient-based or perturbation-based methods" in report

    def test_metadata_with_braces(self):
        """Test that metadata text is inserted verbatim."""
        report = Reporter().generate_report(make_request(dataset="{dataset}"))
        assert "on {dataset} using" in report

    def test_idempotent(self):
        """Test that identical input yields identical output."""
        request = make_request(gt=(1.5, 2.25, 9.75, 8.0), xai=(2, 3, 10, 9))
        assert generate_report(request) == generate_report(request)

    def test_images_do_not_affect_report(self):
        assert generate_report(make_request()) == generate_report(make_request(with_image=False))

    def test_report_dict(self):
        """Test JSON report structure."""
        d = Reporter().generate_report_dict(make_request())

        assert d["metadata"]["xaiTechnique"] == "gradcam"
        assert d["images"] == {"original": False, "heatmap": True}
        assert d["metrics"]["gt_area"] == 100.0
        assert d["report"].startswith("# XAI Analysis Report")
        json.dumps(d)

    def test_compare_requests(self):
        """Test comparison table rows."""
        table = Reporter().compare_requests({
            "b_sample": make_request(gt=(0, 0, 0, 0)),
            "a_sample": make_request(),
        })
        lines = table.splitlines()

        assert "BOUNDING BOX COMPARISON" in table
        rows = [l for l in lines if l.startswith(("a_sample", "b_sample"))]
        assert rows[0].startswith("a_sample")
        assert "undefined" in rows[1]
        assert "0.143" in rows[0]
