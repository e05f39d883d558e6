"""Service singletons and dependency injection for the Shorts Analyzer API."""

from services.ai_service import AIService
from services.analysis_pipeline import VideoAnalysisPipeline
from services.assemblyai_client import AssemblyAIClient
from services.audio_downloader import AudioDownloader
from services.llm_client import LLMClient, create_llm_client
from services.polling import BackoffPolicy
from services.transcript_resolver import TranscriptResolver
from services.transcript_sources import (
    AssemblyAISource,
    CaptionScraperSource,
    LocalWhisperSource,
    OfficialCaptionsSource,
)
from services.transcription import TranscriptionService
from services.youtube_api_service import YouTubeAPIService
from utils.config import load_config
from utils.monitoring import RequestMonitor

# Service singletons
_config: dict | None = None
_youtube_service: YouTubeAPIService | None = None
_llm_client: LLMClient | None = None
_ai_service: AIService | None = None
_assemblyai_client: AssemblyAIClient | None = None
_transcription_service: TranscriptionService | None = None
_transcript_resolver: TranscriptResolver | None = None
_pipeline: VideoAnalysisPipeline | None = None
_monitor: RequestMonitor | None = None


def get_config() -> dict:
    """Get or load the configuration."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def get_youtube_service() -> YouTubeAPIService:
    """Get or create the YouTube Data API service instance."""
    global _youtube_service
    if _youtube_service is None:
        _youtube_service = YouTubeAPIService(get_config().get("youtube_api_key"))
    return _youtube_service


def get_llm_client() -> LLMClient:
    """Get or create the LLM client selected by LLM_PROVIDER."""
    global _llm_client
    if _llm_client is None:
        _llm_client = create_llm_client(get_config())
    return _llm_client


def get_ai_service() -> AIService:
    """Get or create the AI service instance."""
    global _ai_service
    if _ai_service is None:
        config = get_config()
        # Model overrides only apply to the OpenAI provider
        openai = config.get("llm_provider", "openai") == "openai"
        _ai_service = AIService(
            llm=get_llm_client(),
            analysis_model=config.get("analysis_model") if openai else None,
            ideas_model=config.get("ideas_model") if openai else None,
            transcript_max_chars=config.get("transcript_max_chars", 12000),
            idea_count=config.get("idea_count", 5),
        )
    return _ai_service


def get_assemblyai_client() -> AssemblyAIClient:
    """Get or create the AssemblyAI client instance."""
    global _assemblyai_client
    if _assemblyai_client is None:
        config = get_config()
        _assemblyai_client = AssemblyAIClient(
            api_key=config.get("assemblyai_api_key"),
            policy=BackoffPolicy.from_config(config),
        )
    return _assemblyai_client


def get_transcription_service() -> TranscriptionService:
    """Get or create the speech-to-text service selected by TRANSCRIBE_BACKEND."""
    global _transcription_service
    if _transcription_service is None:
        config = get_config()
        _transcription_service = TranscriptionService(
            backend=config.get("transcribe_backend", "openai"),
            openai_api_key=config.get("openai_api_key"),
            api_model=config.get("transcribe_model", "whisper-1"),
            local_model=config.get("whisper_model", "base"),
        )
    return _transcription_service


def get_transcript_resolver() -> TranscriptResolver:
    """Get or create the transcript fallback chain.

    Order: official captions, caption scraping, AssemblyAI, local Whisper.
    """
    global _transcript_resolver
    if _transcript_resolver is None:
        config = get_config()
        downloader = AudioDownloader()
        _transcript_resolver = TranscriptResolver(
            [
                OfficialCaptionsSource(get_youtube_service()),
                CaptionScraperSource(),
                AssemblyAISource(
                    client=get_assemblyai_client(),
                    downloader=downloader,
                    mode=config.get("transcription_mode", "async"),
                    eta_seconds=config.get("transcription_eta_seconds", 60),
                ),
                LocalWhisperSource(
                    downloader=downloader,
                    transcriber=get_transcription_service(),
                    enabled=config.get("local_transcription_enabled", True),
                ),
            ]
        )
    return _transcript_resolver


def get_pipeline() -> VideoAnalysisPipeline:
    """Get or create the analysis pipeline instance."""
    global _pipeline
    if _pipeline is None:
        _pipeline = VideoAnalysisPipeline(
            youtube=get_youtube_service(),
            resolver=get_transcript_resolver(),
            ai_service=get_ai_service(),
        )
    return _pipeline


def get_monitor() -> RequestMonitor:
    """Get or create the request monitor instance."""
    global _monitor
    if _monitor is None:
        _monitor = RequestMonitor()
    return _monitor


async def close_services() -> None:
    """Release network clients held by the singletons (called on shutdown)."""
    global _assemblyai_client, _transcript_resolver, _pipeline
    if _assemblyai_client is not None:
        await _assemblyai_client.close()
        _assemblyai_client = None
        # Both hold the closed client through AssemblyAISource
        _transcript_resolver = None
        _pipeline = None
