"""Shared pytest fixtures for shorts analyzer tests."""

import json
import sys
import tempfile
from pathlib import Path
from typing import Dict, Generator

import pytest

# Add src directory to path for imports
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from models.video import VideoMetadata  # noqa: E402
from services.llm_client import LLMClient  # noqa: E402
from services.transcript_sources.base import TranscriptSource  # noqa: E402


class FakeLLMClient(LLMClient):
    """LLMClient that replays canned responses in order."""

    api_key_env = "OPENAI_API_KEY"

    def __init__(self, responses=None, configured: bool = True):
        self.responses = list(responses or [])
        self.configured = configured
        self.prompts: list[str] = []

    def get_provider_name(self) -> str:
        return "openai"

    def is_configured(self) -> bool:
        return self.configured

    @property
    def default_model(self) -> str:
        return "fake-model"

    def _complete(self, prompt: str, model: str, temperature: float) -> str:
        self.prompts.append(prompt)
        return self.responses.pop(0)


class StaticSource(TranscriptSource):
    """TranscriptSource returning a fixed outcome (or raising)."""

    def __init__(self, name: str, outcome=None, error: Exception | None = None, configured: bool = True):
        self.name = name
        self.outcome = outcome
        self.error = error
        self.configured = configured
        self.calls = 0

    def get_source_name(self) -> str:
        return self.name

    def is_configured(self) -> bool:
        return self.configured

    async def fetch(self, reference):
        self.calls += 1
        if self.error:
            raise self.error
        return self.outcome


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def sample_config() -> Dict:
    """Sample configuration for testing."""
    return {
        "youtube_api_key": "test_youtube_key",
        "openai_api_key": "test_openai_key",
        "gemini_api_key": None,
        "assemblyai_api_key": None,
        "llm_provider": "openai",
        "analysis_model": "gpt-4o-mini",
        "ideas_model": "gpt-4o-mini",
        "gemini_model": "gemini-2.5-flash",
        "transcribe_backend": "openai",
        "transcribe_model": "whisper-1",
        "whisper_model": "base",
        "transcription_mode": "async",
        "transcription_poll_initial_delay": 2.0,
        "transcription_poll_factor": 1.5,
        "transcription_poll_max_delay": 5.0,
        "transcription_poll_max_attempts": 120,
        "transcription_poll_timeout": 600.0,
        "transcription_eta_seconds": 60,
        "local_transcription_enabled": True,
        "transcript_max_chars": 12000,
        "idea_count": 5,
        "admin_key": "secret-admin",
        "cors_origins": ["http://localhost:3000"],
        "log_level": "INFO",
        "log_json": False,
    }


@pytest.fixture
def sample_metadata() -> VideoMetadata:
    """Metadata for a short video."""
    return VideoMetadata(
        video_id="dQw4w9WgXcQ",
        title="3 Habits That Changed My Mornings",
        channel="Daily Routines",
        view_count=1250000,
        published_at="2024-05-01T12:00:00Z",
        duration_seconds=45,
        description="Morning habits that actually stick.",
        like_count=54000,
        channel_id="UC123",
        tags=["morning", "habits"],
    )


@pytest.fixture
def sample_transcript() -> str:
    """Sample short-form transcript for testing."""
    return (
        "Stop scrolling. These three habits changed my mornings forever. "
        "Number one: no phone for the first hour. "
        "Number two: ten minutes of sunlight before coffee. "
        "Number three: write down one thing you will finish today. "
        "Try it for a week and tell me what changed."
    )


@pytest.fixture
def analysis_payload() -> dict:
    """A complete analysis as the LLM would return it."""
    return {
        "hook": "Stop scrolling. These three habits changed my mornings forever.",
        "entryStyle": "direct address pattern interrupt",
        "niche": "productivity",
        "structure": "numbered list of three tips with a call to action",
        "lengthSeconds": 45,
        "pace": "fast",
        "emotion": "motivational",
    }


@pytest.fixture
def ideas_payload() -> list:
    """Generated ideas as the LLM would return them."""
    return [
        {
            "title": "3 Evening Habits for Better Sleep",
            "hook": "You are ruining your sleep before 9pm.",
            "outline": "Hook, three habits, challenge viewers to try for a week",
            "suggestedLength": 40,
            "tone": "motivational",
        },
        {
            "title": "The One-Hour No-Phone Challenge",
            "hook": "I didn't touch my phone for an hour after waking up.",
            "outline": "Day 1 reaction, day 7 results, invite viewers",
            "suggestedLength": 50,
            "tone": "personal",
        },
    ]


@pytest.fixture
def fake_llm(analysis_payload, ideas_payload) -> FakeLLMClient:
    """Configured fake LLM answering the analysis then the ideas prompt."""
    return FakeLLMClient([json.dumps(analysis_payload), json.dumps(ideas_payload)])
