"""Pydantic request/response models for the Shorts Analyzer API."""

from pydantic import BaseModel, Field

# =============================================================================
# Response Models
# =============================================================================


class RootResponse(BaseModel):
    """Root endpoint response."""

    message: str
    version: str

    model_config = {"json_schema_extra": {"examples": [{"message": "Shorts Analyzer API", "version": "1.0.0"}]}}


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    services: dict[str, bool] = Field(default_factory=dict)

    model_config = {
        "json_schema_extra": {
            "examples": [{"status": "healthy", "services": {"youtube": True, "llm": True, "assemblyai": False}}]
        }
    }


class ErrorResponse(BaseModel):
    """Error envelope returned for every failed request."""

    success: bool = False
    error: str
    details: str | None = None

    model_config = {
        "json_schema_extra": {
            "examples": [{"success": False, "error": "Invalid YouTube URL format", "details": "not-a-url"}]
        }
    }


class VideoMetadataResponse(BaseModel):
    """Video metadata as returned to clients."""

    id: str
    title: str
    channel: str
    channelId: str = ""
    viewCount: int = Field(ge=0)
    likeCount: int = Field(default=0, ge=0)
    publishedAt: str
    durationSeconds: int = Field(ge=0)
    description: str = ""
    tags: list[str] = Field(default_factory=list)


class AnalysisResponse(BaseModel):
    """Structured analysis of what makes a video work."""

    hook: str
    entryStyle: str
    niche: str
    structure: str
    lengthSeconds: int
    pace: str
    emotion: str


class ContentIdeaResponse(BaseModel):
    """A single generated content idea."""

    title: str
    hook: str
    outline: str
    suggestedLength: int | None = None
    tone: str | None = None


class AnalysisReportResponse(BaseModel):
    """Completed analysis payload."""

    metadata: VideoMetadataResponse
    transcript: str
    transcriptSource: str
    analysis: AnalysisResponse
    ideas: list[ContentIdeaResponse]


class AnalyzeCompletedResponse(BaseModel):
    """Response when analysis completed synchronously."""

    success: bool = True
    status: str = "completed"
    data: AnalysisReportResponse


class TranscribingData(BaseModel):
    """Pending transcription job details."""

    jobId: str
    estimatedSeconds: int
    metadata: VideoMetadataResponse
    message: str

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "jobId": "5551722-f677-48a6-9287-39c0aafd9ac1",
                    "estimatedSeconds": 60,
                    "metadata": {
                        "id": "dQw4w9WgXcQ",
                        "title": "Example",
                        "channel": "Channel",
                        "viewCount": 1000,
                        "publishedAt": "2024-01-01T00:00:00Z",
                        "durationSeconds": 45,
                    },
                    "message": "Transcription started. Poll /api/check-transcription with the jobId.",
                }
            ]
        }
    }


class TranscribingResponse(BaseModel):
    """Response when a transcription job was started instead."""

    success: bool = True
    status: str = "transcribing"
    data: TranscribingData


class TranscriptUnavailableResponse(BaseModel):
    """Response when no transcript source produced a transcript."""

    success: bool = False
    status: str = "unavailable"
    error: str
    details: str | None = None
    suggestion: str


class TranscriptionStatusResponse(BaseModel):
    """Transcription job status."""

    success: bool = True
    status: str
    jobId: str
    transcript: str | None = None
    error: str | None = None


class TranscribeAudioResponse(BaseModel):
    """Transcript of an uploaded audio file."""

    success: bool = True
    transcript: str
    message: str = "Audio transcribed successfully"


class MonitoringResponse(BaseModel):
    """Request metrics snapshot."""

    success: bool = True
    metrics: dict


class MessageResponse(BaseModel):
    """Generic message response."""

    success: bool = True
    message: str


class DebugVideoResponse(BaseModel):
    """Diagnostics for a single video URL."""

    success: bool = True
    videoId: str
    url: str
    metadata: dict | None = None
    metadataError: str | None = None
    transcriptAttempts: list[dict] = Field(default_factory=list)
    environment: dict[str, bool] = Field(default_factory=dict)
    quotaUsed: int = 0
    nextStep: str


# =============================================================================
# Request Models
# =============================================================================


class AnalyzeVideoRequest(BaseModel):
    """Request body for video analysis."""

    url: str | None = None

    model_config = {"json_schema_extra": {"examples": [{"url": "https://www.youtube.com/shorts/dQw4w9WgXcQ"}]}}


class AnalyzeTranscriptRequest(BaseModel):
    """Request body for resuming analysis with a finished transcript."""

    url: str | None = None
    transcript: str | None = None
