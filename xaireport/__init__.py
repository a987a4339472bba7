"""
xaireport - Bounding-box discrepancy reports for XAI explanations.

This package compares a ground-truth bounding box with the box derived
from an XAI heatmap and renders a templated analysis report.
"""

__version__ = "0.1.0"
