"""Audio download via yt-dlp for the transcription fallbacks."""

import logging
from pathlib import Path

import yt_dlp

from utils.config import get_supported_audio_formats

logger = logging.getLogger(__name__)

# Configure yt-dlp logging to be silent
logging.getLogger("yt_dlp").setLevel(logging.CRITICAL)


class AudioDownloadError(RuntimeError):
    """yt-dlp could not produce an audio file or stream URL."""


class AudioDownloader:
    """Downloads or resolves the best audio track of a video."""

    def __init__(self, audio_format: str = "mp3", max_duration_seconds: int = 3600):
        self.audio_format = audio_format
        self.max_duration_seconds = max_duration_seconds

    def _base_opts(self) -> dict:
        return {
            "format": "bestaudio/best",
            "quiet": True,
            "no_warnings": True,
            "noplaylist": True,
        }

    def resolve_stream_url(self, url: str) -> str:
        """Return a direct audio stream URL without downloading.

        Raises:
            AudioDownloadError: If no stream URL could be resolved
        """
        try:
            with yt_dlp.YoutubeDL(self._base_opts()) as ydl:
                info = ydl.extract_info(url, download=False)
        except yt_dlp.utils.DownloadError as e:
            raise AudioDownloadError(f"Could not resolve audio stream: {e}") from e

        stream_url = (info or {}).get("url")
        if not stream_url:
            raise AudioDownloadError("Could not get audio stream URL")
        return stream_url

    def download(self, url: str, dest_dir: Path) -> Path:
        """Download the audio track of ``url`` into ``dest_dir``.

        The caller owns ``dest_dir`` and is responsible for removing it.

        Returns:
            Path to the extracted audio file

        Raises:
            AudioDownloadError: If download or extraction fails, or the
                video exceeds the configured maximum duration
        """
        opts = {
            **self._base_opts(),
            "outtmpl": str(dest_dir / "%(id)s.%(ext)s"),
            "match_filter": self._duration_filter,
            "postprocessors": [
                {
                    "key": "FFmpegExtractAudio",
                    "preferredcodec": self.audio_format,
                    "preferredquality": "64",
                }
            ],
        }

        logger.info(f"Downloading audio for {url}")
        try:
            with yt_dlp.YoutubeDL(opts) as ydl:
                ydl.download([url])
        except yt_dlp.utils.DownloadError as e:
            raise AudioDownloadError(f"Audio download failed: {e}") from e

        supported = get_supported_audio_formats()
        audio_files = [p for p in dest_dir.iterdir() if p.suffix.lower() in supported]
        if not audio_files:
            raise AudioDownloadError("Failed to locate downloaded audio file")

        audio_path = audio_files[0]
        logger.debug(f"Audio downloaded: {audio_path.name} ({audio_path.stat().st_size} bytes)")
        return audio_path

    def _duration_filter(self, info: dict, *, incomplete: bool = False) -> str | None:
        duration = info.get("duration")
        if duration is not None and duration > self.max_duration_seconds:
            return f"Duration {duration}s exceeds maximum {self.max_duration_seconds}s"
        return None
