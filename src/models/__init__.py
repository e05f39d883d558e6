# Data models for the shorts analyzer
from .video import VideoReference, VideoMetadata
from .transcript import (
    TranscriptReady,
    TranscriptPending,
    TranscriptUnavailable,
    TranscriptOutcome,
    TranscriptionJobState,
    TranscriptionJobStatus,
)
from .analysis import AnalysisResult, ContentIdea, AnalysisReport

__all__ = [
    "VideoReference",
    "VideoMetadata",
    # Transcript acquisition
    "TranscriptReady",
    "TranscriptPending",
    "TranscriptUnavailable",
    "TranscriptOutcome",
    "TranscriptionJobState",
    "TranscriptionJobStatus",
    # Analysis output
    "AnalysisResult",
    "ContentIdea",
    "AnalysisReport",
]
