"""Metrics and reporting components."""

from .calculator import MetricsCalculator
from .reporter import Reporter, generate_report
from .techniques import get_alternative_techniques, normalize_technique

__all__ = [
    "MetricsCalculator",
    "Reporter",
    "generate_report",
    "get_alternative_techniques",
    "normalize_technique",
]
