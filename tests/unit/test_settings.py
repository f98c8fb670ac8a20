"""Tests for environment-driven settings."""

import pytest
from pydantic import ValidationError

from src.config import DataSettings, KPISettings, LLMSettings, Settings, get_settings, reset_settings


class TestSettings:
    def test_defaults(self):
        settings = Settings()
        assert settings.data.mode == "demo"
        assert settings.kpi.window_days == 30
        assert settings.kpi.dead_stock_days == 90
        assert settings.llm.provider == "ollama"

    def test_env_prefixes(self, monkeypatch):
        monkeypatch.setenv("DATA_MODE", "remote")
        monkeypatch.setenv("KPI_STAGNANT_DAYS", "45")
        monkeypatch.setenv("LLM_MODEL_NAME", "qwen2.5:7b")

        assert DataSettings().mode == "remote"
        assert KPISettings().stagnant_days == 45
        assert LLMSettings().model_name == "qwen2.5:7b"

    def test_api_url_trailing_slash(self):
        assert DataSettings(api_url="http://x.test/api/").api_url == "http://x.test/api"

    def test_invalid_window(self):
        with pytest.raises(ValidationError):
            KPISettings(window_days=0)

    def test_unknown_mode(self):
        with pytest.raises(ValidationError):
            DataSettings(mode="sqlite")

    def test_global_instance_is_cached_until_reset(self):
        first = get_settings()
        assert get_settings() is first
        reset_settings()
        assert get_settings() is not first
