"""
Analysis service standing in for the LLM round-trip.
Validates input, waits out the simulated latency and renders the report.
"""

import asyncio
import logging
from typing import Any, Awaitable, Callable, Mapping, Optional

from xaireport.core.config import AppConfig
from xaireport.core.exceptions import (
    AnalysisInProgressError,
    InvalidImageError,
    XAIReportError,
)
from xaireport.core.prompt_store import PromptStore
from xaireport.core.types import (
    AnalysisOutcome,
    AnalysisRequest,
    ImagePayload,
    Notification,
    NotificationLevel,
)
from xaireport.core.validation import build_request, validate_image
from xaireport.metrics.reporter import Reporter

logger = logging.getLogger(__name__)

VALIDATION_MESSAGE = "Please fill in all required fields and upload images"
SUCCESS_MESSAGE = "Analysis completed successfully!"
FAILURE_MESSAGE = "Error during analysis. Please try again."
FAILURE_REPORT = "Error: Unable to complete analysis. Please check your inputs and try again."


class AnalysisService:
    """
    Runs one analysis at a time.

    The latency is injected as an awaitable factory so tests and scripts
    can skip it. While an analysis is pending, further submissions are
    refused; the pending flag is cleared whether the run succeeds or not.
    """

    def __init__(
        self,
        config: Optional[AppConfig] = None,
        reporter: Optional[Reporter] = None,
        prompt_store: Optional[PromptStore] = None,
        delay: Optional[Callable[[], Awaitable[None]]] = None,
    ):
        """
        Initialize service.

        Args:
            config: AppConfig (loaded from environment if not provided)
            reporter: Reporter used to render reports
            prompt_store: Where the prompt is saved after a successful run;
                None disables persistence
            delay: Coroutine factory awaited before each report
        """
        self.config = config or AppConfig.from_env()
        self.reporter = reporter or Reporter()
        self.prompt_store = prompt_store
        self._delay = delay or self._simulated_delay
        self._busy = False

    async def _simulated_delay(self) -> None:
        await asyncio.sleep(self.config.simulated_delay)

    @property
    def is_busy(self) -> bool:
        return self._busy

    async def analyze(self, request: AnalysisRequest) -> AnalysisOutcome:
        """
        Produce the report for an already validated request.

        Raises:
            AnalysisInProgressError: If another analysis is still pending
        """
        if self._busy:
            raise AnalysisInProgressError("An analysis is already in progress")

        self._busy = True
        try:
            await self._delay()
            report = self.reporter.generate_report(request)

            if self.prompt_store is not None:
                self.prompt_store.save_prompt(request.prompt)

            logger.info(
                f"Analysis completed for {request.metadata.xai_technique} "
                f"on {request.metadata.dataset}"
            )
            return AnalysisOutcome(
                success=True,
                report=report,
                notification=Notification(NotificationLevel.SUCCESS, SUCCESS_MESSAGE),
            )
        except Exception as e:
            logger.error(f"Error during analysis: {e}", exc_info=True)
            return AnalysisOutcome(
                success=False,
                report=FAILURE_REPORT,
                notification=Notification(NotificationLevel.ERROR, FAILURE_MESSAGE),
            )
        finally:
            self._busy = False

    async def submit(
        self,
        fields: Mapping[str, Any],
        original_image: Optional[ImagePayload] = None,
        heatmap_image: Optional[ImagePayload] = None,
        require_prompt: bool = True,
    ) -> AnalysisOutcome:
        """
        Validate uploads and raw form values, then analyze.

        Invalid input returns an error outcome without running the analysis.
        A rejected upload carries its own message; any other problem gets
        the generic validation message.
        """
        for image in (original_image, heatmap_image):
            if image is None:
                continue
            try:
                validate_image(image, self.config.max_image_bytes)
            except InvalidImageError as e:
                logger.warning(f"Rejected upload {image.name or image.mime_type}: {e}")
                return AnalysisOutcome(
                    success=False,
                    report="",
                    notification=Notification(NotificationLevel.ERROR, str(e)),
                )

        try:
            request = build_request(fields, original_image, heatmap_image, require_prompt)
        except XAIReportError as e:
            logger.warning(f"Rejected submission: {e}")
            return AnalysisOutcome(
                success=False,
                report="",
                notification=Notification(NotificationLevel.ERROR, VALIDATION_MESSAGE),
            )
        return await self.analyze(request)

    def analyze_sync(self, request: AnalysisRequest) -> AnalysisOutcome:
        """Blocking wrapper around analyze() for scripts."""
        return asyncio.run(self.analyze(request))
