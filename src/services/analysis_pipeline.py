"""End-to-end video analysis: metadata, transcript, analysis, ideas."""

import asyncio
import logging
from dataclasses import dataclass
from typing import Optional

from models.analysis import AnalysisReport
from models.transcript import TranscriptPending, TranscriptReady, TranscriptUnavailable
from models.video import VideoMetadata
from services.ai_service import AIService
from services.errors import InvalidInputError
from services.transcript_resolver import TranscriptResolver
from services.url_normalizer import extract_video_id
from services.youtube_api_service import YouTubeAPIService

logger = logging.getLogger(__name__)


class PipelineStatus:
    """Pipeline outcome status constants."""

    COMPLETED = "completed"
    TRANSCRIBING = "transcribing"
    UNAVAILABLE = "unavailable"


@dataclass
class PipelineOutcome:
    """Result of one pipeline run.

    Exactly one of ``report``, ``pending`` or ``unavailable`` is set,
    matching ``status``.
    """

    status: str
    metadata: VideoMetadata
    report: Optional[AnalysisReport] = None
    pending: Optional[TranscriptPending] = None
    unavailable: Optional[TranscriptUnavailable] = None


class VideoAnalysisPipeline:
    """Runs the per-request analysis state machine.

    Start -> MetadataFetched -> TranscriptResolved -> Analyzed -> IdeasGenerated.
    Pending and Unavailable transcripts end the run early. Any stage error
    propagates to the caller and aborts the remaining stages.
    """

    def __init__(
        self,
        youtube: YouTubeAPIService,
        resolver: TranscriptResolver,
        ai_service: AIService,
    ):
        self.youtube = youtube
        self.resolver = resolver
        self.ai_service = ai_service

    async def analyze(self, url: str) -> PipelineOutcome:
        """Analyze the video at ``url``.

        Raises:
            InvalidInputError: If the URL is missing or not a video URL
            UpstreamUnavailableError: If metadata or the LLM is unavailable
            SchemaMismatchError: If an LLM response cannot be parsed
        """
        reference = extract_video_id(url)
        logger.info(f"Analyzing video {reference.video_id}")

        metadata = await asyncio.to_thread(self.youtube.get_video_metadata, reference.video_id)

        outcome = await self.resolver.resolve(reference)

        if isinstance(outcome, TranscriptPending):
            return PipelineOutcome(
                status=PipelineStatus.TRANSCRIBING, metadata=metadata, pending=outcome
            )
        if isinstance(outcome, TranscriptUnavailable):
            return PipelineOutcome(
                status=PipelineStatus.UNAVAILABLE, metadata=metadata, unavailable=outcome
            )

        report = await self._analyze_ready(metadata, outcome)
        return PipelineOutcome(status=PipelineStatus.COMPLETED, metadata=metadata, report=report)

    async def analyze_transcript(self, url: str, transcript: str) -> PipelineOutcome:
        """Resume the pipeline with a transcript obtained out of band.

        Used once a pending transcription job has completed.
        """
        reference = extract_video_id(url)
        if not transcript or not transcript.strip():
            raise InvalidInputError("Transcript is required")

        metadata = await asyncio.to_thread(self.youtube.get_video_metadata, reference.video_id)
        ready = TranscriptReady(text=transcript.strip(), source="provided")
        report = await self._analyze_ready(metadata, ready)
        return PipelineOutcome(status=PipelineStatus.COMPLETED, metadata=metadata, report=report)

    async def _analyze_ready(
        self, metadata: VideoMetadata, transcript: TranscriptReady
    ) -> AnalysisReport:
        self.ai_service.require_configured()

        analysis = await asyncio.to_thread(
            self.ai_service.analyze_transcript, transcript.text, metadata
        )
        ideas = await asyncio.to_thread(self.ai_service.generate_ideas, analysis)

        return AnalysisReport(
            metadata=metadata,
            transcript=transcript.text,
            transcript_source=transcript.source,
            analysis=analysis,
            ideas=ideas,
        )
