"""Transcript source that downloads the audio and runs speech-to-text."""

import asyncio
import logging
import tempfile
from pathlib import Path

from models.transcript import TranscriptOutcome, TranscriptUnavailable
from models.video import VideoReference
from services.audio_downloader import AudioDownloader, AudioDownloadError
from services.transcript_sources.base import TranscriptSource
from services.transcription import TranscriptionService

logger = logging.getLogger(__name__)

TEMP_DIR_PREFIX = "shorts-analyzer-audio-"


class LocalWhisperSource(TranscriptSource):
    """Last-resort strategy: yt-dlp download followed by Whisper.

    The audio lives in a temporary directory that is removed on every exit
    path, including exceptions and task cancellation.
    """

    def __init__(
        self,
        downloader: AudioDownloader,
        transcriber: TranscriptionService,
        enabled: bool = True,
        temp_root: str | None = None,
    ):
        self.downloader = downloader
        self.transcriber = transcriber
        self.enabled = enabled
        self.temp_root = temp_root

    def get_source_name(self) -> str:
        return "local_whisper"

    def is_configured(self) -> bool:
        return self.enabled and self.transcriber.is_configured()

    async def _download(self, url: str, dest_dir: Path) -> Path:
        """Run the download in a worker thread.

        A worker thread cannot be interrupted, so on cancellation this waits
        for yt-dlp to stop writing before the caller removes dest_dir.
        """
        task = asyncio.ensure_future(asyncio.to_thread(self.downloader.download, url, dest_dir))
        try:
            return await asyncio.shield(task)
        except asyncio.CancelledError:
            await asyncio.gather(task, return_exceptions=True)
            raise

    async def fetch(self, reference: VideoReference) -> TranscriptOutcome:
        with tempfile.TemporaryDirectory(prefix=TEMP_DIR_PREFIX, dir=self.temp_root) as tmp:
            try:
                audio_path = await self._download(reference.watch_url, Path(tmp))
            except AudioDownloadError as e:
                return TranscriptUnavailable(reason=str(e), source=self.get_source_name())

            text = await self.transcriber.transcribe_audio(str(audio_path))

        logger.debug(f"Removed temporary audio directory {tmp}")
        return self._from_text(text, "speech-to-text produced no text")
