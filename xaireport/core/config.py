"""
Application configuration loaded from the environment.
Values may be placed in a local .env file.
"""

import os
import logging
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

load_dotenv()
logger = logging.getLogger(__name__)

DEFAULT_DELAY_SECONDS = 2.0
DEFAULT_STORE_PATH = "data/prompt_store.json"
DEFAULT_MAX_IMAGE_BYTES = 5 * 1024 * 1024


@dataclass
class AppConfig:
    """
    Runtime settings.

    Attributes:
        simulated_delay: Seconds to wait before producing a report, standing
            in for the LLM round-trip
        store_path: JSON file backing the prompt store
        max_image_bytes: Upload size limit (exclusive)
        log_level: Logging level name for scripts
    """
    simulated_delay: float = DEFAULT_DELAY_SECONDS
    store_path: str = DEFAULT_STORE_PATH
    max_image_bytes: int = DEFAULT_MAX_IMAGE_BYTES
    log_level: str = "INFO"

    @classmethod
    def from_env(
        cls,
        simulated_delay: Optional[float] = None,
        store_path: Optional[str] = None,
        max_image_bytes: Optional[int] = None,
        log_level: Optional[str] = None,
    ) -> "AppConfig":
        """
        Build config from XAI_REPORT_* environment variables.

        Explicit arguments take precedence over the environment.

        Raises:
            ValueError: If a numeric variable cannot be parsed
        """
        if simulated_delay is None:
            simulated_delay = float(
                os.getenv("XAI_REPORT_DELAY_SECONDS", DEFAULT_DELAY_SECONDS)
            )
        if store_path is None:
            store_path = os.getenv("XAI_REPORT_STORE_PATH", DEFAULT_STORE_PATH)
        if max_image_bytes is None:
            max_image_bytes = int(
                os.getenv("XAI_REPORT_MAX_IMAGE_BYTES", DEFAULT_MAX_IMAGE_BYTES)
            )
        if log_level is None:
            log_level = os.getenv("XAI_REPORT_LOG_LEVEL", "INFO")

        if simulated_delay < 0:
            raise ValueError("simulated_delay must be non-negative")

        config = cls(
            simulated_delay=simulated_delay,
            store_path=store_path,
            max_image_bytes=max_image_bytes,
            log_level=log_level.upper(),
        )
        logger.debug(f"Loaded config: {config}")
        return config
