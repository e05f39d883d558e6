"""Transcript source that submits the audio to AssemblyAI."""

import asyncio
import logging

from models.transcript import (
    TranscriptionJobState,
    TranscriptOutcome,
    TranscriptPending,
    TranscriptUnavailable,
)
from models.video import VideoReference
from services.assemblyai_client import AssemblyAIClient
from services.audio_downloader import AudioDownloader, AudioDownloadError
from services.transcript_sources.base import TranscriptSource

logger = logging.getLogger(__name__)


class AssemblyAISource(TranscriptSource):
    """Submits an AssemblyAI job for the video's audio stream.

    In ``async`` mode the job handle is returned immediately and the caller
    polls the status endpoint. In ``blocking`` mode the job is polled here
    until it completes, fails, or the backoff policy times out.
    """

    MODES = ("async", "blocking")

    def __init__(
        self,
        client: AssemblyAIClient,
        downloader: AudioDownloader,
        mode: str = "async",
        eta_seconds: int = 60,
    ):
        if mode not in self.MODES:
            raise ValueError(f"Unknown transcription mode '{mode}'")
        self.client = client
        self.downloader = downloader
        self.mode = mode
        self.eta_seconds = eta_seconds

    def get_source_name(self) -> str:
        return "assemblyai"

    def is_configured(self) -> bool:
        return self.client.is_configured()

    async def fetch(self, reference: VideoReference) -> TranscriptOutcome:
        try:
            audio_url = await asyncio.to_thread(
                self.downloader.resolve_stream_url, reference.watch_url
            )
        except AudioDownloadError as e:
            return TranscriptUnavailable(reason=str(e), source=self.get_source_name())

        job_id = await self.client.submit(audio_url)

        if self.mode == "async":
            return TranscriptPending(
                job_id=job_id, source=self.get_source_name(), eta_seconds=self.eta_seconds
            )

        status = await self.client.wait_for_completion(job_id)
        if status.state == TranscriptionJobState.COMPLETED:
            return self._from_text(status.text, "transcription job returned no text")

        return TranscriptUnavailable(
            reason=f"transcription job {status.state.value}: {status.error or 'no detail'}",
            source=self.get_source_name(),
        )
