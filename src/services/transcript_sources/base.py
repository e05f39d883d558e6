"""Base abstraction for transcript sources."""

import re
from abc import ABC, abstractmethod

from models.transcript import TranscriptOutcome, TranscriptReady, TranscriptUnavailable
from models.video import VideoReference

_SRT_INDEX = re.compile(r"^\d+$")
_TIMESTAMP = re.compile(r"\d{1,2}:\d{2}(?::\d{2})?[.,]\d{3}")
_INLINE_TAG = re.compile(r"<[^>]*>")
_SOUND_CUE = re.compile(r"\[.*?\]")
_STYLE_BLOCK = re.compile(r"\{.*?\}")


def clean_subtitle_text(content: str) -> str:
    """Reduce SRT or WebVTT content to its spoken text.

    Drops headers, cue numbers, timestamp lines, inline tags and sound cues
    such as [Music], then joins the remaining lines with spaces.
    """
    lines = []
    for raw in content.splitlines():
        line = raw.strip()
        if not line:
            continue
        if line.startswith(("WEBVTT", "NOTE", "Kind:", "Language:")):
            continue
        if _SRT_INDEX.match(line) or _TIMESTAMP.search(line):
            continue

        line = _INLINE_TAG.sub("", line)
        line = _SOUND_CUE.sub("", line)
        line = _STYLE_BLOCK.sub("", line).strip()
        if line and (not lines or lines[-1] != line):
            lines.append(line)

    return " ".join(lines)


class TranscriptSource(ABC):
    """Abstract base class for one strategy in the transcript fallback chain."""

    @abstractmethod
    async def fetch(self, reference: VideoReference) -> TranscriptOutcome:
        """Try to acquire a transcript for the video.

        Implementations return TranscriptUnavailable for expected misses
        (no captions, disabled transcripts); unexpected exceptions are
        handled by the resolver.

        Args:
            reference: The video to transcribe

        Returns:
            TranscriptReady, TranscriptPending or TranscriptUnavailable
        """

    @abstractmethod
    def get_source_name(self) -> str:
        """Get the name of this transcript source.

        Returns:
            Source name (e.g., "official_captions", "assemblyai")
        """

    def is_configured(self) -> bool:
        """Check if this source has required configuration (API keys, etc.).

        Default implementation returns True (no config required).
        Override in subclasses that require API keys.
        """
        return True

    def _from_text(self, text: str | None, empty_reason: str) -> TranscriptOutcome:
        """Wrap text as Ready, or Unavailable when it is blank."""
        if text and text.strip():
            return TranscriptReady(text=text.strip(), source=self.get_source_name())
        return TranscriptUnavailable(reason=empty_reason, source=self.get_source_name())
