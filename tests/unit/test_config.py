"""Tests for application settings."""

import pytest

from api.config import Settings, get_settings


class TestSettings:
    """Tests for Settings."""

    def test_test_environment(self) -> None:
        settings = get_settings()
        assert settings.is_test is True
        assert settings.is_production is False

    def test_cached(self) -> None:
        assert get_settings() is get_settings()

    def test_defaults(self) -> None:
        settings = Settings(_env_file=None)
        assert settings.render_timeout_ms == 30_000
        assert settings.render_max_attempts == 3
        assert settings.robots_timeout_seconds == 5.0
        assert settings.results_index_limit == 100

    def test_llm_disabled_without_key(self) -> None:
        settings = Settings(_env_file=None)
        assert settings.llm_api_key is None
        assert settings.llm_enabled is False

    def test_anthropic_key_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ANTHROPIC_API_KEY", "sk-ant-test")
        settings = Settings(_env_file=None)
        assert settings.llm_enabled is True
        assert settings.llm_model == settings.anthropic_model

    def test_openai_provider(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LLM_PROVIDER", "openai")
        monkeypatch.setenv("ANTHROPIC_API_KEY", "sk-ant-test")
        settings = Settings(_env_file=None)
        assert settings.llm_api_key is None
        assert settings.llm_model == "gpt-4o-mini"

    def test_invalid_provider(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LLM_PROVIDER", "other")
        with pytest.raises(ValueError):
            Settings(_env_file=None)
