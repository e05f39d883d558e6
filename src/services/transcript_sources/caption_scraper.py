"""Transcript source using the community youtube-transcript-api scraper."""

import asyncio
import logging

from youtube_transcript_api import (
    NoTranscriptFound,
    TranscriptsDisabled,
    VideoUnavailable,
    YouTubeTranscriptApi,
)

from models.transcript import TranscriptOutcome, TranscriptUnavailable
from models.video import VideoReference
from services.transcript_sources.base import TranscriptSource

logger = logging.getLogger(__name__)


class CaptionScraperSource(TranscriptSource):
    """Reads manual or auto-generated captions the way the web player does."""

    def __init__(self, languages: tuple[str, ...] = ("en",), api: YouTubeTranscriptApi | None = None):
        self.languages = list(languages)
        self.api = api or YouTubeTranscriptApi()

    def get_source_name(self) -> str:
        return "caption_scraper"

    def _fetch_text(self, video_id: str) -> str:
        transcript_list = self.api.list(video_id)

        # Priority: preferred languages -> any manual -> any auto-generated
        try:
            transcript = transcript_list.find_transcript(self.languages)
        except NoTranscriptFound:
            available = [t.language_code for t in transcript_list]
            try:
                transcript = transcript_list.find_manually_created_transcript(available)
            except NoTranscriptFound:
                transcript = transcript_list.find_generated_transcript(available)

        fetched = transcript.fetch()
        logger.info(
            f"Fetched {len(fetched)} caption snippets ({transcript.language_code}"
            f"{', auto-generated' if transcript.is_generated else ''})"
        )
        return " ".join(snippet.text.strip() for snippet in fetched if snippet.text.strip())

    async def fetch(self, reference: VideoReference) -> TranscriptOutcome:
        try:
            text = await asyncio.to_thread(self._fetch_text, reference.video_id)
        except TranscriptsDisabled:
            return TranscriptUnavailable(
                reason="transcripts are disabled for this video", source=self.get_source_name()
            )
        except NoTranscriptFound:
            return TranscriptUnavailable(
                reason="no caption track found", source=self.get_source_name()
            )
        except VideoUnavailable:
            return TranscriptUnavailable(
                reason="video unavailable", source=self.get_source_name()
            )

        return self._from_text(text, "caption track was empty")
