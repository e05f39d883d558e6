"""Unit tests for the end-to-end analysis pipeline."""

from unittest.mock import Mock

import pytest

from conftest import FakeLLMClient, StaticSource
from models.transcript import TranscriptPending, TranscriptReady, TranscriptUnavailable
from services.ai_service import AIService
from services.analysis_pipeline import PipelineStatus, VideoAnalysisPipeline
from services.errors import InvalidInputError, SchemaMismatchError, UpstreamUnavailableError
from services.transcript_resolver import TranscriptResolver

URL = "https://www.youtube.com/shorts/dQw4w9WgXcQ"


def make_pipeline(sample_metadata, llm, *sources):
    youtube = Mock()
    youtube.get_video_metadata.return_value = sample_metadata
    pipeline = VideoAnalysisPipeline(youtube, TranscriptResolver(list(sources)), AIService(llm))
    return pipeline, youtube


@pytest.mark.unit
class TestVideoAnalysisPipeline:
    """Tests for VideoAnalysisPipeline."""

    @pytest.mark.asyncio
    async def test_completed(self, sample_metadata, sample_transcript, fake_llm):
        source = StaticSource("caption_scraper", TranscriptReady(sample_transcript, "caption_scraper"))
        pipeline, youtube = make_pipeline(sample_metadata, fake_llm, source)

        outcome = await pipeline.analyze(URL)

        assert outcome.status == PipelineStatus.COMPLETED
        youtube.get_video_metadata.assert_called_once_with("dQw4w9WgXcQ")
        report = outcome.report.to_dict()
        assert report["transcriptSource"] == "caption_scraper"
        assert report["analysis"]["niche"] == "productivity"
        assert len(report["ideas"]) == 2

    @pytest.mark.asyncio
    async def test_pending_skips_analysis(self, sample_metadata):
        """A submitted transcription job returns before any LLM call."""
        llm = FakeLLMClient(configured=False)
        pending = TranscriptPending("job-9", "assemblyai", 60)
        pipeline, _ = make_pipeline(sample_metadata, llm, StaticSource("assemblyai", pending))

        outcome = await pipeline.analyze(URL)

        assert outcome.status == PipelineStatus.TRANSCRIBING
        assert outcome.pending is pending
        assert outcome.metadata is sample_metadata
        assert llm.prompts == []

    @pytest.mark.asyncio
    async def test_unavailable(self, sample_metadata, fake_llm):
        source = StaticSource("caption_scraper", TranscriptUnavailable("transcripts are disabled"))
        pipeline, _ = make_pipeline(sample_metadata, fake_llm, source)

        outcome = await pipeline.analyze(URL)

        assert outcome.status == PipelineStatus.UNAVAILABLE
        assert "transcripts are disabled" in outcome.unavailable.reason
        assert fake_llm.prompts == []

    @pytest.mark.asyncio
    async def test_invalid_url_stops_before_metadata(self, sample_metadata, fake_llm):
        pipeline, youtube = make_pipeline(sample_metadata, fake_llm)

        with pytest.raises(InvalidInputError):
            await pipeline.analyze("https://vimeo.com/123")

        youtube.get_video_metadata.assert_not_called()

    @pytest.mark.asyncio
    async def test_missing_llm_key(self, sample_metadata, sample_transcript):
        """Metadata and transcript succeed, then the unconfigured LLM is reported."""
        source = StaticSource("caption_scraper", TranscriptReady(sample_transcript, "caption_scraper"))
        pipeline, _ = make_pipeline(sample_metadata, FakeLLMClient(configured=False), source)

        with pytest.raises(UpstreamUnavailableError, match="OPENAI_API_KEY"):
            await pipeline.analyze(URL)

        assert source.calls == 1

    @pytest.mark.asyncio
    async def test_schema_mismatch_aborts_ideas(self, sample_metadata, sample_transcript):
        llm = FakeLLMClient(['{"hook": "only"}', "[]"])
        source = StaticSource("caption_scraper", TranscriptReady(sample_transcript, "caption_scraper"))
        pipeline, _ = make_pipeline(sample_metadata, llm, source)

        with pytest.raises(SchemaMismatchError):
            await pipeline.analyze(URL)

        assert len(llm.prompts) == 1

    @pytest.mark.asyncio
    async def test_analyze_transcript(self, sample_metadata, sample_transcript, fake_llm):
        pipeline, _ = make_pipeline(sample_metadata, fake_llm)

        outcome = await pipeline.analyze_transcript(URL, f"  {sample_transcript}  ")

        assert outcome.status == PipelineStatus.COMPLETED
        assert outcome.report.transcript == sample_transcript
        assert outcome.report.transcript_source == "provided"

    @pytest.mark.asyncio
    async def test_analyze_transcript_requires_text(self, sample_metadata, fake_llm):
        pipeline, _ = make_pipeline(sample_metadata, fake_llm)

        with pytest.raises(InvalidInputError, match="Transcript is required"):
            await pipeline.analyze_transcript(URL, "   ")
