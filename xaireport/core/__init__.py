"""Core components: types, errors, validation, config, and prompt storage."""

from .types import (
    AnalysisReport,
    BoundingBox,
    AnalysisMetadata,
    ImagePayload,
    AnalysisRequest,
    BoxMetrics,
    Notification,
    NotificationLevel,
    AnalysisOutcome,
)
from .exceptions import (
    XAIReportError,
    MissingFieldError,
    InvalidFieldError,
    InvalidImageError,
    AnalysisInProgressError,
)
from .config import AppConfig
from .prompt_store import PromptStore

__all__ = [
    "AnalysisReport",
    "BoundingBox",
    "AnalysisMetadata",
    "ImagePayload",
    "AnalysisRequest",
    "BoxMetrics",
    "Notification",
    "NotificationLevel",
    "AnalysisOutcome",
    "XAIReportError",
    "MissingFieldError",
    "InvalidFieldError",
    "InvalidImageError",
    "AnalysisInProgressError",
    "AppConfig",
    "PromptStore",
]
