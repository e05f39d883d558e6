"""Diagnostic and monitoring routes for the Shorts Analyzer API."""

import asyncio
import logging

from api.dependencies import (
    get_config,
    get_monitor,
    get_transcript_resolver,
    get_youtube_service,
)
from api.schemas import DebugVideoResponse, ErrorResponse, MessageResponse, MonitoringResponse
from fastapi import APIRouter, Depends, Header, HTTPException
from models.transcript import TranscriptReady
from services.errors import AnalyzerError
from services.transcript_resolver import TranscriptResolver
from services.url_normalizer import extract_video_id
from services.youtube_api_service import YouTubeAPIService
from utils.monitoring import RequestMonitor

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Diagnostics"])

# Strategies that answer within the request (no job submission, no audio download)
DEBUG_SOURCES = ("official_captions", "caption_scraper")

_ENV_KEYS = {
    "YOUTUBE_API_KEY": "youtube_api_key",
    "OPENAI_API_KEY": "openai_api_key",
    "GEMINI_API_KEY": "gemini_api_key",
    "ASSEMBLYAI_API_KEY": "assemblyai_api_key",
    "ADMIN_KEY": "admin_key",
}


def require_admin_key(
    x_admin_key: str | None = Header(default=None),
    config: dict = Depends(get_config),
) -> None:
    """Reject requests whose x-admin-key header does not match ADMIN_KEY."""
    admin_key = config.get("admin_key")
    if not admin_key or x_admin_key != admin_key:
        raise HTTPException(status_code=403, detail="Forbidden")


def _next_step(metadata_ok: bool, transcript_found: bool, environment: dict[str, bool]) -> str:
    if not environment["YOUTUBE_API_KEY"]:
        return "Set YOUTUBE_API_KEY to fetch video metadata."
    if not metadata_ok:
        return "Check that the video exists, is public, and that the API key has quota left."
    if transcript_found:
        return "Captions are available. POST the URL to /api/analyze-video."
    if environment["ASSEMBLYAI_API_KEY"]:
        return "No captions found. /api/analyze-video will start an AssemblyAI transcription job."
    return "No captions found. Set ASSEMBLYAI_API_KEY or enable local transcription."


@router.get(
    "/api/debug-video",
    response_model=DebugVideoResponse,
    responses={400: {"model": ErrorResponse}},
    summary="Diagnose a video URL",
    description="Runs URL parsing, metadata lookup, and the caption strategies without analysis.",
)
async def debug_video(
    url: str | None = None,
    config: dict = Depends(get_config),
    youtube: YouTubeAPIService = Depends(get_youtube_service),
    resolver: TranscriptResolver = Depends(get_transcript_resolver),
) -> dict:
    """Report what each pipeline stage sees for a URL."""
    reference = extract_video_id(url or "")

    metadata = None
    metadata_error = None
    try:
        result = await asyncio.to_thread(youtube.get_video_metadata, reference.video_id)
        metadata = result.to_dict()
    except AnalyzerError as e:
        metadata_error = str(e)

    attempts = []
    transcript_found = False
    for source in resolver.sources:
        name = source.get_source_name()
        if name not in DEBUG_SOURCES:
            continue
        if not source.is_configured():
            attempts.append({"source": name, "status": "not_configured"})
            continue
        try:
            outcome = await source.fetch(reference)
        except Exception as e:
            logger.warning(f"[debug] {name} raised {type(e).__name__}: {e}")
            attempts.append({"source": name, "status": "error", "reason": str(e)})
            continue

        if isinstance(outcome, TranscriptReady):
            transcript_found = True
            attempts.append(
                {
                    "source": name,
                    "status": "ready",
                    "characters": len(outcome.text),
                    "preview": outcome.text[:200],
                }
            )
        else:
            attempts.append(
                {"source": name, "status": "unavailable", "reason": getattr(outcome, "reason", "")}
            )

    environment = {env: bool(config.get(key)) for env, key in _ENV_KEYS.items()}

    return {
        "success": True,
        "videoId": reference.video_id,
        "url": reference.watch_url,
        "metadata": metadata,
        "metadataError": metadata_error,
        "transcriptAttempts": attempts,
        "environment": environment,
        "quotaUsed": youtube.quota_used,
        "nextStep": _next_step(metadata is not None, transcript_found, environment),
    }


@router.get(
    "/api/monitoring",
    response_model=MonitoringResponse,
    responses={403: {"model": ErrorResponse}},
    dependencies=[Depends(require_admin_key)],
    summary="Request metrics",
    description="Request counts, error rate, durations, and recent errors. Requires x-admin-key.",
)
async def get_monitoring(monitor: RequestMonitor = Depends(get_monitor)) -> dict:
    """Return the current metrics snapshot."""
    return {"success": True, "metrics": monitor.get_metrics()}


@router.delete(
    "/api/monitoring",
    response_model=MessageResponse,
    responses={403: {"model": ErrorResponse}},
    dependencies=[Depends(require_admin_key)],
    summary="Reset request metrics",
)
async def clear_monitoring(monitor: RequestMonitor = Depends(get_monitor)) -> dict:
    """Drop all recorded metrics."""
    monitor.clear()
    logger.info("Monitoring data cleared")
    return {"success": True, "message": "Monitoring data cleared"}
