"""Speech-to-text service using OpenAI Whisper (API) or faster-whisper (local)."""

import asyncio
import logging
from pathlib import Path
from typing import Optional

from openai import OpenAI

from services.errors import UpstreamUnavailableError
from utils.config import get_supported_audio_formats

logger = logging.getLogger(__name__)


class TranscriptionService:
    """Service for transcribing downloaded audio files."""

    BACKENDS = ("openai", "local")

    def __init__(
        self,
        backend: str = "openai",
        openai_api_key: Optional[str] = None,
        api_model: str = "whisper-1",
        local_model: str = "base",
        device: str = "auto",
        compute_type: str = "auto",
    ):
        if backend not in self.BACKENDS:
            raise ValueError(f"Unknown transcription backend '{backend}'")

        self.backend = backend
        self.api_model = api_model
        self.model_name = local_model
        self.device = device
        self.compute_type = compute_type
        self.openai_client = OpenAI(api_key=openai_api_key) if openai_api_key else None
        self.model = None
        self._load_lock = asyncio.Lock()

    def is_configured(self) -> bool:
        """Check whether the selected backend can run."""
        if self.backend == "openai":
            return self.openai_client is not None
        return True

    def _load_model(self) -> None:
        # faster-whisper is an optional extra; import it only when used
        from faster_whisper import WhisperModel

        try:
            logger.info(f"Loading Whisper model: {self.model_name}")
            self.model = WhisperModel(
                self.model_name,
                device=self.device,
                compute_type=self.compute_type,
            )
            logger.info(
                f"Loaded faster-whisper model {self.model_name} "
                f"(device={self.device}, compute_type={self.compute_type})"
            )
        except Exception as e:
            logger.error(f"Failed to load Whisper model '{self.model_name}': {e}")
            raise

    async def transcribe_audio(self, input_file_path: str) -> str:
        """Transcribe an audio file to plain text.

        Args:
            input_file_path: Path to an audio file

        Returns:
            Transcript text (stripped)
        """
        file_path = Path(input_file_path)

        if not file_path.exists():
            raise FileNotFoundError(f"File not found: {file_path}")
        if file_path.suffix.lower() not in get_supported_audio_formats():
            raise ValueError(f"Unsupported audio format: {file_path.suffix}")

        logger.info(f"Starting {self.backend} transcription of: {file_path.name}")

        if self.backend == "openai":
            return await asyncio.to_thread(self._transcribe_openai_api, file_path)

        async with self._load_lock:
            if self.model is None:
                await asyncio.to_thread(self._load_model)
        return await asyncio.to_thread(self._transcribe_faster_whisper, str(file_path))

    def _transcribe_openai_api(self, audio_path: Path) -> str:
        """Transcribe using the OpenAI audio transcription endpoint."""
        if self.openai_client is None:
            raise UpstreamUnavailableError(
                "OpenAI API key not configured",
                details="Set the OPENAI_API_KEY environment variable.",
            )

        with open(audio_path, "rb") as audio_file:
            response = self.openai_client.audio.transcriptions.create(
                model=self.api_model,
                file=audio_file,
                response_format="text",
            )

        # response_format="text" returns a plain string
        text = response if isinstance(response, str) else getattr(response, "text", "")
        logger.info(f"Transcription complete: {len(text)} characters")
        return text.strip()

    def _transcribe_faster_whisper(self, audio_path: str) -> str:
        """Transcribe using faster-whisper backend."""
        if not self.model:
            raise ValueError("Whisper model not loaded")

        # faster-whisper returns a generator of segments and info
        segments_generator, info = self.model.transcribe(audio_path)
        text_parts = [str(seg.text).strip() for seg in segments_generator]
        text = " ".join(part for part in text_parts if part)

        logger.info(
            f"Transcription complete: {len(text_parts)} segments, "
            f"{float(info.duration):.1f}s duration, language: {info.language}"
        )
        return text.strip()
