"""Tests for configuration loading."""

import pytest

from xaireport.core.config import DEFAULT_MAX_IMAGE_BYTES, AppConfig


class TestAppConfig:
    """Tests for AppConfig.from_env."""

    def test_defaults(self, monkeypatch):
        for name in (
            "XAI_REPORT_DELAY_SECONDS",
            "XAI_REPORT_STORE_PATH",
            "XAI_REPORT_MAX_IMAGE_BYTES",
            "XAI_REPORT_LOG_LEVEL",
        ):
            monkeypatch.delenv(name, raising=False)

        config = AppConfig.from_env()

        assert config.simulated_delay == 2.0
        assert config.max_image_bytes == DEFAULT_MAX_IMAGE_BYTES
        assert config.log_level == "INFO"

    def test_environment(self, monkeypatch):
        monkeypatch.setenv("XAI_REPORT_DELAY_SECONDS", "0.5")
        monkeypatch.setenv("XAI_REPORT_STORE_PATH", "/tmp/prompts.json")
        monkeypatch.setenv("XAI_REPORT_LOG_LEVEL", "debug")

        config = AppConfig.from_env()

        assert config.simulated_delay == 0.5
        assert config.store_path == "/tmp/prompts.json"
        assert config.log_level == "DEBUG"

    def test_override_beats_environment(self, monkeypatch):
        monkeypatch.setenv("XAI_REPORT_DELAY_SECONDS", "5")
        assert AppConfig.from_env(simulated_delay=0.0).simulated_delay == 0.0

    def test_negative_delay(self):
        with pytest.raises(ValueError):
            AppConfig.from_env(simulated_delay=-1.0)
