"""Video analysis routes for the Shorts Analyzer API."""

import logging
import tempfile
from pathlib import Path

from api.dependencies import get_assemblyai_client, get_pipeline, get_transcription_service
from api.schemas import (
    AnalyzeCompletedResponse,
    AnalyzeTranscriptRequest,
    AnalyzeVideoRequest,
    ErrorResponse,
    TranscribeAudioResponse,
    TranscribingResponse,
    TranscriptionStatusResponse,
    TranscriptUnavailableResponse,
)
from fastapi import APIRouter, Depends, File, UploadFile
from fastapi.responses import JSONResponse
from models.transcript import TranscriptionJobState
from openai import OpenAIError
from services.analysis_pipeline import PipelineOutcome, PipelineStatus, VideoAnalysisPipeline
from services.assemblyai_client import AssemblyAIClient
from services.errors import InvalidInputError, TranscriptUnavailableError, UpstreamUnavailableError
from services.transcription import TranscriptionService
from utils.config import get_supported_audio_formats

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Analysis"])

UPLOAD_DIR_PREFIX = "shorts-analyzer-upload-"

_ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Invalid input or no transcript available"},
    500: {"model": ErrorResponse, "description": "Upstream or configuration failure"},
}


def build_response(outcome: PipelineOutcome) -> dict:
    """Assemble the JSON body for a pipeline outcome.

    Raises:
        TranscriptUnavailableError: If no transcript could be acquired
    """
    if outcome.status == PipelineStatus.COMPLETED:
        return {"success": True, "status": "completed", "data": outcome.report.to_dict()}

    if outcome.status == PipelineStatus.TRANSCRIBING:
        pending = outcome.pending
        return {
            "success": True,
            "status": "transcribing",
            "data": {
                "jobId": pending.job_id,
                "estimatedSeconds": pending.eta_seconds,
                "metadata": outcome.metadata.to_dict(),
                "message": (
                    "Transcription started. Poll /api/check-transcription?id="
                    f"{pending.job_id} and submit the transcript to /api/analyze-transcript."
                ),
            },
        }

    raise TranscriptUnavailableError(
        "No transcript available for this video", details=outcome.unavailable.reason
    )


@router.post(
    "/api/analyze-video",
    response_model=AnalyzeCompletedResponse | TranscribingResponse,
    responses={**_ERROR_RESPONSES, 400: {"model": TranscriptUnavailableResponse}},
    summary="Analyze a video",
    description="Fetch metadata and a transcript for a YouTube URL, then analyze it and generate ideas.",
)
async def analyze_video(
    request: AnalyzeVideoRequest,
    pipeline: VideoAnalysisPipeline = Depends(get_pipeline),
) -> dict:
    """Run the full analysis pipeline for one URL."""
    if not request.url or not request.url.strip():
        raise InvalidInputError("Video URL is required")

    outcome = await pipeline.analyze(request.url)
    logger.info(f"Analysis finished with status '{outcome.status}'")
    return build_response(outcome)


@router.post(
    "/api/analyze-transcript",
    response_model=AnalyzeCompletedResponse,
    responses=_ERROR_RESPONSES,
    summary="Analyze a finished transcript",
    description="Resume analysis once a pending transcription job has completed.",
)
async def analyze_transcript(
    request: AnalyzeTranscriptRequest,
    pipeline: VideoAnalysisPipeline = Depends(get_pipeline),
) -> dict:
    """Analyze a transcript supplied by the client."""
    if not request.url or not request.url.strip():
        raise InvalidInputError("Video URL is required")
    if not request.transcript or not request.transcript.strip():
        raise InvalidInputError("Transcript is required")

    outcome = await pipeline.analyze_transcript(request.url, request.transcript)
    return build_response(outcome)


@router.get(
    "/api/check-transcription",
    response_model=TranscriptionStatusResponse,
    responses=_ERROR_RESPONSES,
    summary="Check transcription status",
    description="Poll a transcription job started by /api/analyze-video.",
)
async def check_transcription(
    id: str | None = None,
    assemblyai: AssemblyAIClient = Depends(get_assemblyai_client),
):
    """Return the current state of a transcription job."""
    if not id or not id.strip():
        raise InvalidInputError("Transcription job id is required")

    status = await assemblyai.get_status(id.strip())

    if status.state == TranscriptionJobState.ERROR:
        logger.warning(f"Transcription job {status.job_id} failed: {status.error}")
        return JSONResponse(
            status_code=500,
            content={
                "success": False,
                "status": "error",
                "jobId": status.job_id,
                "error": "Transcription failed",
                "details": status.error or "unknown error",
            },
        )

    body = {"success": True, "status": status.state.value, "jobId": status.job_id}
    if status.state == TranscriptionJobState.COMPLETED:
        body["transcript"] = status.text or ""
    return body


@router.post(
    "/api/transcribe-audio",
    response_model=TranscribeAudioResponse,
    responses=_ERROR_RESPONSES,
    summary="Transcribe an audio upload",
    description="Speech-to-text for a client-supplied audio file (multipart field `audio`).",
)
async def transcribe_audio(
    audio: UploadFile | None = File(default=None),
    transcriber: TranscriptionService = Depends(get_transcription_service),
) -> dict:
    """Transcribe an uploaded audio file with the configured backend."""
    if audio is None or not audio.filename:
        raise InvalidInputError("No audio file provided")

    suffix = Path(audio.filename).suffix.lower()
    if suffix not in get_supported_audio_formats():
        raise InvalidInputError("Unsupported audio format", details=suffix or audio.filename)
    if not transcriber.is_configured():
        raise UpstreamUnavailableError(
            "Speech-to-text is not configured",
            details="Set OPENAI_API_KEY or TRANSCRIBE_BACKEND=local.",
        )

    data = await audio.read()
    logger.info(f"Transcribing upload {audio.filename} ({len(data)} bytes)")

    with tempfile.TemporaryDirectory(prefix=UPLOAD_DIR_PREFIX) as tmp:
        path = Path(tmp) / f"upload{suffix}"
        path.write_bytes(data)
        try:
            text = await transcriber.transcribe_audio(str(path))
        except (OSError, ValueError, OpenAIError) as e:
            raise UpstreamUnavailableError("Failed to transcribe audio", details=str(e)) from e

    return {"success": True, "transcript": text, "message": "Audio transcribed successfully"}
