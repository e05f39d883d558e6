"""Core routes for the Shorts Analyzer API (root and health check)."""

from api.dependencies import get_assemblyai_client, get_ai_service, get_youtube_service
from api.schemas import HealthResponse, RootResponse
from fastapi import APIRouter, Depends
from services.ai_service import AIService
from services.assemblyai_client import AssemblyAIClient
from services.youtube_api_service import YouTubeAPIService

router = APIRouter(tags=["Core"])


@router.get(
    "/",
    response_model=RootResponse,
    summary="API root",
    description="Returns API name and version.",
)
async def root() -> dict[str, str]:
    """Root endpoint."""
    return {"message": "Shorts Analyzer API", "version": "1.0.0"}


@router.get(
    "/api/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Returns server health status and which upstream services have keys.",
)
async def health(
    youtube: YouTubeAPIService = Depends(get_youtube_service),
    ai_service: AIService = Depends(get_ai_service),
    assemblyai: AssemblyAIClient = Depends(get_assemblyai_client),
) -> dict:
    """Health check endpoint."""
    return {
        "status": "healthy",
        "services": {
            "youtube": youtube.is_configured(),
            "llm": ai_service.is_configured(),
            "assemblyai": assemblyai.is_configured(),
        },
    }
