"""
Persistent key-value store for the analysis prompt.
Backed by a single JSON file so the prompt survives between runs.
"""

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Dict, Optional, Union

import pytz

logger = logging.getLogger(__name__)

PROMPT_KEY = "xaiAnalysisPrompt"


class PromptStore:
    """
    Saves and restores text values under fixed keys.

    Each value is stored with the UTC time it was written. A missing or
    unreadable file behaves like an empty store.
    """

    def __init__(self, path: Union[str, Path]):
        """
        Initialize store.

        Args:
            path: JSON file to read from and write to
        """
        self.path = Path(path)

    def _read(self) -> Dict[str, Dict[str, str]]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Error reading prompt store {self.path}: {e}")
            return {}
        if not isinstance(data, dict):
            logger.warning(f"Ignoring malformed prompt store {self.path}")
            return {}
        return data

    def _write(self, data: Dict[str, Dict[str, str]]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)

    def get(self, key: str) -> Optional[str]:
        entry = self._read().get(key)
        if isinstance(entry, dict):
            value = entry.get("value")
            return value if isinstance(value, str) else None
        return None

    def set(self, key: str, value: str) -> None:
        data = self._read()
        data[key] = {
            "value": value,
            "saved_at": datetime.now(pytz.UTC).isoformat(),
        }
        self._write(data)
        logger.debug(f"Saved {key} ({len(value)} chars) to {self.path}")

    def delete(self, key: str) -> None:
        data = self._read()
        if key in data:
            del data[key]
            self._write(data)

    def load_prompt(self) -> Optional[str]:
        """Return the saved prompt, or None if nothing was saved."""
        return self.get(PROMPT_KEY)

    def save_prompt(self, prompt: str) -> None:
        self.set(PROMPT_KEY, prompt)

    def clear_prompt(self) -> None:
        self.delete(PROMPT_KEY)
