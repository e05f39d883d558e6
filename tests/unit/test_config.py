"""Unit tests for configuration loading and validation."""

import pytest

from utils.config import load_config, validate_config

ENV_VARS = [
    "YOUTUBE_API_KEY",
    "OPENAI_API_KEY",
    "GEMINI_API_KEY",
    "ASSEMBLYAI_API_KEY",
    "LLM_PROVIDER",
    "TRANSCRIPTION_MODE",
    "TRANSCRIBE_BACKEND",
    "TRANSCRIPTION_POLL_MAX_ATTEMPTS",
    "IDEA_COUNT",
    "CORS_ORIGINS",
    "LOG_JSON",
    "LOCAL_TRANSCRIPTION_ENABLED",
]


@pytest.fixture
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.mark.unit
class TestLoadConfig:
    """Tests for load_config()."""

    def test_defaults(self, clean_env):
        config = load_config()

        assert config["youtube_api_key"] is None
        assert config["llm_provider"] == "openai"
        assert config["transcription_mode"] == "async"
        assert config["transcription_poll_max_attempts"] == 120
        assert config["idea_count"] == 5
        assert config["local_transcription_enabled"] is True
        assert config["log_json"] is False

    def test_overrides(self, clean_env):
        clean_env.setenv("LLM_PROVIDER", "Gemini")
        clean_env.setenv("IDEA_COUNT", "3")
        clean_env.setenv("CORS_ORIGINS", "https://a.example, https://b.example,")
        clean_env.setenv("LOG_JSON", "TRUE")

        config = load_config()

        assert config["llm_provider"] == "gemini"
        assert config["idea_count"] == 3
        assert config["cors_origins"] == ["https://a.example", "https://b.example"]
        assert config["log_json"] is True


@pytest.mark.unit
class TestValidateConfig:
    """Tests for validate_config()."""

    def test_valid(self, sample_config):
        assert validate_config(sample_config) == []

    def test_missing_keys(self, sample_config):
        sample_config.update(youtube_api_key=None, openai_api_key=None)

        errors = validate_config(sample_config)

        assert any("YOUTUBE_API_KEY" in e for e in errors)
        assert any("OPENAI_API_KEY" in e for e in errors)

    def test_gemini_needs_gemini_key(self, sample_config):
        sample_config["llm_provider"] = "gemini"

        assert any("GEMINI_API_KEY" in e for e in validate_config(sample_config))

    def test_bad_enums(self, sample_config):
        sample_config.update(transcription_mode="later", transcribe_backend="cloud")

        errors = validate_config(sample_config)

        assert any("TRANSCRIPTION_MODE" in e for e in errors)
        assert any("TRANSCRIBE_BACKEND" in e for e in errors)
