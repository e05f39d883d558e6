"""Transcript source backed by the YouTube Data API captions endpoints."""

import asyncio
import logging

from googleapiclient.errors import HttpError

from models.transcript import TranscriptOutcome, TranscriptUnavailable
from models.video import VideoReference
from services.transcript_sources.base import TranscriptSource, clean_subtitle_text
from services.youtube_api_service import YouTubeAPIService

logger = logging.getLogger(__name__)


class OfficialCaptionsSource(TranscriptSource):
    """Fetches uploaded caption tracks through the official API."""

    def __init__(self, youtube: YouTubeAPIService, preferred_language: str = "en"):
        self.youtube = youtube
        self.preferred_language = preferred_language

    def get_source_name(self) -> str:
        return "official_captions"

    def is_configured(self) -> bool:
        return self.youtube.is_configured()

    def _pick_track(self, tracks: list[dict]) -> dict:
        """Prefer a manual track in the preferred language, then any manual, then anything."""
        def rank(track: dict) -> tuple[int, int]:
            language_match = track["language"].split("-")[0] == self.preferred_language
            manual = track["track_kind"].lower() != "asr"
            return (0 if language_match else 1, 0 if manual else 1)

        return sorted(tracks, key=rank)[0]

    async def fetch(self, reference: VideoReference) -> TranscriptOutcome:
        try:
            tracks = await asyncio.to_thread(self.youtube.list_captions, reference.video_id)
            if not tracks:
                return TranscriptUnavailable(
                    reason="no caption tracks published", source=self.get_source_name()
                )

            track = self._pick_track(tracks)
            logger.info(
                f"Downloading caption track {track['id']} "
                f"({track['language']}, {track['track_kind'] or 'standard'})"
            )
            raw = await asyncio.to_thread(self.youtube.download_caption, track["id"])
        except HttpError as e:
            status = getattr(e.resp, "status", "unknown")
            logger.warning(f"Captions API failed for {reference.video_id}: HTTP {status}")
            return TranscriptUnavailable(
                reason=f"captions API returned HTTP {status}", source=self.get_source_name()
            )

        return self._from_text(clean_subtitle_text(raw), "caption track was empty")
