"""Configuration loading and validation for the shorts analyzer."""

import os
from pathlib import Path

from dotenv import load_dotenv

# Get the project root directory (parent of src)
PROJECT_ROOT = Path(__file__).parent.parent.parent

# Load environment variables from .env file in project root
load_dotenv(PROJECT_ROOT / ".env")


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() == "true"


def load_config() -> dict:
    """Load configuration from environment variables."""
    config = {
        # Upstream API keys
        "youtube_api_key": os.getenv("YOUTUBE_API_KEY"),
        "openai_api_key": os.getenv("OPENAI_API_KEY"),
        "gemini_api_key": os.getenv("GEMINI_API_KEY"),
        "assemblyai_api_key": os.getenv("ASSEMBLYAI_API_KEY"),
        # LLM selection
        "llm_provider": os.getenv("LLM_PROVIDER", "openai").lower(),
        "analysis_model": os.getenv("ANALYSIS_MODEL", "gpt-4o-mini"),
        "ideas_model": os.getenv("IDEAS_MODEL", "gpt-4o-mini"),
        "gemini_model": os.getenv("GEMINI_MODEL", "gemini-2.5-flash"),
        # Speech-to-text for the local fallback
        "transcribe_backend": os.getenv("TRANSCRIBE_BACKEND", "openai").lower(),
        "transcribe_model": os.getenv("TRANSCRIBE_MODEL", "whisper-1"),
        "whisper_model": os.getenv("WHISPER_MODEL", "base"),
        # Third-party transcription job handling
        "transcription_mode": os.getenv("TRANSCRIPTION_MODE", "async").lower(),
        "transcription_poll_initial_delay": float(
            os.getenv("TRANSCRIPTION_POLL_INITIAL_DELAY", "2.0")
        ),
        "transcription_poll_factor": float(os.getenv("TRANSCRIPTION_POLL_FACTOR", "1.5")),
        "transcription_poll_max_delay": float(
            os.getenv("TRANSCRIPTION_POLL_MAX_DELAY", "5.0")
        ),
        "transcription_poll_max_attempts": int(
            os.getenv("TRANSCRIPTION_POLL_MAX_ATTEMPTS", "120")
        ),
        "transcription_poll_timeout": float(os.getenv("TRANSCRIPTION_POLL_TIMEOUT", "600")),
        "transcription_eta_seconds": int(os.getenv("TRANSCRIPTION_ETA_SECONDS", "60")),
        "local_transcription_enabled": _env_bool("LOCAL_TRANSCRIPTION_ENABLED", "true"),
        # Analysis settings
        "transcript_max_chars": int(os.getenv("TRANSCRIPT_MAX_CHARS", "12000")),
        "idea_count": int(os.getenv("IDEA_COUNT", "5")),
        # Server
        "admin_key": os.getenv("ADMIN_KEY"),
        "cors_origins": [
            origin.strip()
            for origin in os.getenv(
                "CORS_ORIGINS", "http://localhost:3000,http://localhost:5173"
            ).split(",")
            if origin.strip()
        ],
        "log_level": os.getenv("LOG_LEVEL", "INFO"),
        "log_json": _env_bool("LOG_JSON", "false"),
    }

    return config


def validate_config(config: dict) -> list[str]:
    """Validate configuration and return list of errors."""
    errors = []

    if not config.get("youtube_api_key"):
        errors.append("YOUTUBE_API_KEY is required for video metadata")

    provider = config.get("llm_provider")
    if provider == "openai":
        if not config.get("openai_api_key"):
            errors.append("OPENAI_API_KEY is required when LLM_PROVIDER=openai")
    elif provider == "gemini":
        if not config.get("gemini_api_key"):
            errors.append("GEMINI_API_KEY is required when LLM_PROVIDER=gemini")
    else:
        errors.append(f"LLM_PROVIDER must be 'openai' or 'gemini', got '{provider}'")

    if config.get("transcription_mode") not in ("async", "blocking"):
        errors.append("TRANSCRIPTION_MODE must be 'async' or 'blocking'")

    backend = config.get("transcribe_backend")
    if backend not in ("openai", "local"):
        errors.append("TRANSCRIBE_BACKEND must be 'openai' or 'local'")
    elif (
        backend == "openai"
        and config.get("local_transcription_enabled")
        and not config.get("openai_api_key")
    ):
        errors.append("OPENAI_API_KEY is required for TRANSCRIBE_BACKEND=openai")

    if config.get("transcription_poll_max_attempts", 0) < 1:
        errors.append("TRANSCRIPTION_POLL_MAX_ATTEMPTS must be at least 1")

    # AssemblyAI is optional: without a key the chain skips that strategy

    return errors


def get_supported_audio_formats() -> list[str]:
    """Return list of supported audio file extensions."""
    return [".mp3", ".wav", ".flac", ".aac", ".ogg", ".m4a", ".webm", ".opus"]
