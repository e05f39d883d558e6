"""Unit tests for data models."""

import pytest

from models.analysis import AnalysisReport, AnalysisResult, ContentIdea
from models.transcript import TranscriptionJobState
from models.video import VideoMetadata


@pytest.mark.unit
class TestVideoMetadata:
    """Tests for VideoMetadata."""

    def test_to_dict_uses_camel_case(self, sample_metadata):
        data = sample_metadata.to_dict()

        assert data["id"] == "dQw4w9WgXcQ"
        assert data["viewCount"] == 1250000
        assert data["durationSeconds"] == 45
        assert data["publishedAt"] == "2024-05-01T12:00:00Z"
        assert "view_count" not in data

    @pytest.mark.parametrize("field", ["view_count", "duration_seconds"])
    def test_negative_counts_rejected(self, field):
        kwargs = {
            "video_id": "dQw4w9WgXcQ",
            "title": "t",
            "channel": "c",
            "view_count": 1,
            "published_at": "2024-01-01T00:00:00Z",
            "duration_seconds": 1,
        }
        kwargs[field] = -1

        with pytest.raises(ValueError):
            VideoMetadata(**kwargs)


@pytest.mark.unit
class TestAnalysisModels:
    """Tests for the analysis result models."""

    def test_report_shape(self, sample_metadata):
        analysis = AnalysisResult(
            hook="Stop scrolling.",
            entry_style="direct address",
            niche="productivity",
            structure="three tips",
            length_seconds=45,
            pace="fast",
            emotion="motivational",
        )
        ideas = [
            ContentIdea(title="A", hook="B", outline="C", suggested_length=30, tone="calm"),
            ContentIdea(title="D", hook="E", outline="F"),
        ]

        data = AnalysisReport(sample_metadata, "transcript", "caption_scraper", analysis, ideas).to_dict()

        assert set(data) == {"metadata", "transcript", "transcriptSource", "analysis", "ideas"}
        assert data["analysis"]["entryStyle"] == "direct address"
        assert data["analysis"]["lengthSeconds"] == 45
        assert data["ideas"][0] == {
            "title": "A",
            "hook": "B",
            "outline": "C",
            "suggestedLength": 30,
            "tone": "calm",
        }
        assert data["ideas"][1] == {"title": "D", "hook": "E", "outline": "F"}

    def test_job_state_terminal(self):
        assert TranscriptionJobState.COMPLETED.is_terminal
        assert TranscriptionJobState.TIMEOUT.is_terminal
        assert not TranscriptionJobState.PROCESSING.is_terminal
