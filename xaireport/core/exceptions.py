"""
Exception hierarchy for request validation and analysis.
"""

from typing import Iterable


class XAIReportError(Exception):
    """Base class for all xaireport errors."""


class MissingFieldError(XAIReportError, ValueError):
    """One or more required form values are absent."""

    def __init__(self, fields: Iterable[str]):
        self.fields = list(fields)
        super().__init__(f"Missing required fields: {', '.join(self.fields)}")


class InvalidFieldError(XAIReportError, ValueError):
    """A form value is present but cannot be interpreted."""

    def __init__(self, field: str, value: object):
        self.field = field
        self.value = value
        super().__init__(f"Invalid value for {field}: {value!r}")


class InvalidImageError(XAIReportError, ValueError):
    """An uploaded image is not an image or is too large."""


class AnalysisInProgressError(XAIReportError, RuntimeError):
    """An analysis was submitted while another one is still pending."""
