"""Analysis, idea and report models returned by the pipeline."""

from dataclasses import dataclass, field
from typing import ClassVar, List, Optional

from models.video import VideoMetadata


@dataclass(frozen=True)
class AnalysisResult:
    """Structured breakdown of what makes a video work.

    Every field is required: a response missing any of them is rejected
    rather than returned partially filled.
    """

    hook: str
    entry_style: str
    niche: str
    structure: str
    length_seconds: int
    pace: str
    emotion: str

    # Keys as they appear in the LLM response and the API payload
    REQUIRED_FIELDS: ClassVar[dict[str, str]] = {
        "hook": "hook",
        "entryStyle": "entry_style",
        "niche": "niche",
        "structure": "structure",
        "lengthSeconds": "length_seconds",
        "pace": "pace",
        "emotion": "emotion",
    }

    def to_dict(self) -> dict:
        return {key: getattr(self, attr) for key, attr in self.REQUIRED_FIELDS.items()}


@dataclass(frozen=True)
class ContentIdea:
    """A generated content idea; list order is generation order."""

    title: str
    hook: str
    outline: str
    suggested_length: Optional[int] = None  # seconds
    tone: Optional[str] = None

    def to_dict(self) -> dict:
        data = {"title": self.title, "hook": self.hook, "outline": self.outline}
        if self.suggested_length is not None:
            data["suggestedLength"] = self.suggested_length
        if self.tone:
            data["tone"] = self.tone
        return data


@dataclass
class AnalysisReport:
    """Everything produced for one analyzed video."""

    metadata: VideoMetadata
    transcript: str
    transcript_source: str
    analysis: AnalysisResult
    ideas: List[ContentIdea] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "metadata": self.metadata.to_dict(),
            "transcript": self.transcript,
            "transcriptSource": self.transcript_source,
            "analysis": self.analysis.to_dict(),
            "ideas": [idea.to_dict() for idea in self.ideas],
        }
