"""Transcript acquisition results and transcription job state."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union


@dataclass(frozen=True)
class TranscriptReady:
    """Transcript text is available."""

    text: str
    source: str  # name of the strategy that produced it


@dataclass(frozen=True)
class TranscriptPending:
    """A third-party transcription job was submitted; poll it later."""

    job_id: str
    source: str
    eta_seconds: int


@dataclass(frozen=True)
class TranscriptUnavailable:
    """No transcript could be acquired."""

    reason: str
    source: Optional[str] = None


TranscriptOutcome = Union[TranscriptReady, TranscriptPending, TranscriptUnavailable]


class TranscriptionJobState(str, Enum):
    """Lifecycle of an asynchronous transcription job."""

    SUBMITTED = "submitted"
    QUEUED = "queued"
    PROCESSING = "processing"
    COMPLETED = "completed"
    ERROR = "error"
    TIMEOUT = "timeout"

    @property
    def is_terminal(self) -> bool:
        return self in (
            TranscriptionJobState.COMPLETED,
            TranscriptionJobState.ERROR,
            TranscriptionJobState.TIMEOUT,
        )


@dataclass
class TranscriptionJobStatus:
    """Snapshot of an asynchronous transcription job."""

    job_id: str
    state: TranscriptionJobState
    text: Optional[str] = None
    error: Optional[str] = None
    attempts: int = 0
