"""AI service for transcript analysis and content idea generation.

Both stages send one prompt to the configured LLM and expect JSON back. When
the response is not valid JSON a plain-text parser makes a best-effort
attempt; the analysis is still rejected unless every field is present.
"""

import json
import math
import logging
import re
from typing import List, Optional

from models.analysis import AnalysisResult, ContentIdea
from models.video import VideoMetadata
from services.errors import SchemaMismatchError
from services.llm_client import LLMClient
from services.prompts import (
    IDEA_GENERATOR,
    PROMPT_VERSIONS,
    TRANSCRIPT_ANALYZER,
    extract_json_block,
    strip_markdown_code_blocks,
)

logger = logging.getLogger(__name__)

_KEY_NORMALIZER = re.compile(r"[^a-z]")
_NUMBER = re.compile(r"\d+")
_LABELED_LINE = re.compile(r"^(?:\d+[.)]\s*)?[\s\-*•#]*\**([A-Za-z][A-Za-z _-]{1,30}?)\**\s*[:：]\s*(.+)$")
_NUMBERED_HEADER = re.compile(r"^\s*(?:\d+[.)]|#+|[-*•])\s*")

# Normalized key -> AnalysisResult attribute
_ANALYSIS_ALIASES = {
    "hook": "hook",
    "entrystyle": "entry_style",
    "entry": "entry_style",
    "niche": "niche",
    "structure": "structure",
    "lengthseconds": "length_seconds",
    "length": "length_seconds",
    "duration": "length_seconds",
    "pace": "pace",
    "pacing": "pace",
    "emotion": "emotion",
}

_IDEA_ALIASES = {
    "title": "title",
    "hook": "hook",
    "outline": "outline",
    "suggestedlength": "suggested_length",
    "length": "suggested_length",
    "tone": "tone",
}


def _normalize_key(key: str) -> str:
    return _KEY_NORMALIZER.sub("", key.lower())


def _to_seconds(value) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, float) and not math.isfinite(value):
        return None
    if isinstance(value, (int, float)):
        return max(0, int(value))
    match = _NUMBER.search(str(value))
    return int(match.group()) if match else None


def _load_json(text: str, opener: str):
    """json.loads the response, retrying on the embedded block if needed."""
    cleaned = strip_markdown_code_blocks(text)
    try:
        return json.loads(cleaned)
    except json.JSONDecodeError:
        block = extract_json_block(cleaned, opener)
        if block is None:
            raise
        return json.loads(block)


def parse_labeled_lines(text: str, aliases: dict[str, str]) -> dict[str, str]:
    """Collect "Label: value" lines whose label maps to a known field."""
    fields: dict[str, str] = {}
    for line in text.splitlines():
        match = _LABELED_LINE.match(line.strip())
        if not match:
            continue
        attr = aliases.get(_normalize_key(match.group(1)))
        if attr and attr not in fields:
            fields[attr] = match.group(2).strip().strip("*").strip()
    return fields


def parse_analysis_response(text: str) -> AnalysisResult:
    """Parse an LLM response into an AnalysisResult.

    Raises:
        SchemaMismatchError: If any required field is missing or blank
    """
    try:
        data = _load_json(text, "{")
        if not isinstance(data, dict):
            raise SchemaMismatchError("Analysis response is not a JSON object")
        fields = {}
        for key, value in data.items():
            attr = _ANALYSIS_ALIASES.get(_normalize_key(key))
            if attr and attr not in fields and value not in (None, ""):
                fields[attr] = value
    except json.JSONDecodeError:
        logger.warning("Analysis response is not JSON, falling back to line parsing")
        fields = parse_labeled_lines(text, _ANALYSIS_ALIASES)

    if "length_seconds" in fields:
        seconds = _to_seconds(fields["length_seconds"])
        if seconds is None:
            del fields["length_seconds"]
        else:
            fields["length_seconds"] = seconds

    required = AnalysisResult.REQUIRED_FIELDS
    missing = [key for key, attr in required.items() if attr not in fields]
    for key, attr in required.items():
        if attr != "length_seconds" and attr in fields:
            fields[attr] = str(fields[attr]).strip()
            if not fields[attr]:
                missing.append(key)

    if missing:
        raise SchemaMismatchError(
            "Analysis response is missing required fields",
            details=", ".join(sorted(set(missing))),
        )

    return AnalysisResult(**{attr: fields[attr] for attr in required.values()})


def _idea_from_fields(fields: dict) -> Optional[ContentIdea]:
    title = str(fields.get("title") or "").strip()
    if not title:
        return None

    outline = fields.get("outline") or ""
    if isinstance(outline, list):
        outline = "\n".join(str(step).strip() for step in outline)

    length = fields.get("suggested_length")
    tone = fields.get("tone")
    return ContentIdea(
        title=title,
        hook=str(fields.get("hook") or "").strip(),
        outline=str(outline).strip(),
        suggested_length=_to_seconds(length) if length not in (None, "") else None,
        tone=str(tone).strip() if tone else None,
    )


def _split_idea_blocks(text: str) -> list[str]:
    """Split plain-text ideas on blank lines or numbered headings."""
    blocks: list[list[str]] = []
    current: list[str] = []
    for line in text.splitlines():
        stripped = line.strip()
        starts_new = bool(re.match(r"^\s*(?:\d+[.)]|#{1,3}\s)", line))
        if not stripped or starts_new:
            if current:
                blocks.append(current)
            current = [stripped] if stripped else []
            continue
        current.append(stripped)
    if current:
        blocks.append(current)
    return ["\n".join(block) for block in blocks]


def parse_ideas_response(text: str) -> List[ContentIdea]:
    """Parse an LLM response into ordered ContentIdea objects.

    Raises:
        SchemaMismatchError: If no idea with a title could be parsed
    """
    ideas: List[ContentIdea] = []

    try:
        data = _load_json(text, "[")
        if isinstance(data, dict):
            data = data.get("ideas", [])
        if not isinstance(data, list):
            raise SchemaMismatchError("Ideas response is not a JSON array")

        for item in data:
            if not isinstance(item, dict):
                continue
            fields = {}
            for key, value in item.items():
                attr = _IDEA_ALIASES.get(_normalize_key(key))
                if attr and attr not in fields:
                    fields[attr] = value
            idea = _idea_from_fields(fields)
            if idea:
                ideas.append(idea)
            else:
                logger.warning("Skipping idea without a title")

    except json.JSONDecodeError:
        logger.warning("Ideas response is not JSON, falling back to block parsing")
        for block in _split_idea_blocks(text):
            fields = parse_labeled_lines(block, _IDEA_ALIASES)
            if "title" not in fields:
                first_line = _NUMBERED_HEADER.sub("", block.splitlines()[0]).strip("* ")
                if first_line and ":" not in first_line:
                    fields["title"] = first_line
            idea = _idea_from_fields(fields)
            if idea:
                ideas.append(idea)

    if not ideas:
        raise SchemaMismatchError("Ideas response contained no usable ideas")
    return ideas


class AIService:
    """Service for transcript analysis and idea generation."""

    def __init__(
        self,
        llm: LLMClient,
        analysis_model: Optional[str] = None,
        ideas_model: Optional[str] = None,
        transcript_max_chars: int = 12000,
        idea_count: int = 5,
    ):
        """Initialize the service.

        Args:
            llm: Completion client shared by both stages
            analysis_model: Model override for the analysis call
            ideas_model: Model override for the ideas call
            transcript_max_chars: Transcript is truncated to this many characters
            idea_count: Number of ideas requested
        """
        self.llm = llm
        self.analysis_model = analysis_model
        self.ideas_model = ideas_model
        self.transcript_max_chars = transcript_max_chars
        self.idea_count = idea_count

    def is_configured(self) -> bool:
        return self.llm.is_configured()

    def require_configured(self) -> None:
        self.llm.require_configured()

    def analyze_transcript(self, transcript: str, metadata: VideoMetadata) -> AnalysisResult:
        """Analyze what makes the video work.

        Args:
            transcript: Full transcript text
            metadata: Video metadata (title, channel and view count are used)

        Returns:
            AnalysisResult with every field populated

        Raises:
            SchemaMismatchError: If the response lacks a required field
            UpstreamUnavailableError: If the LLM is unconfigured or fails
        """
        if len(transcript) > self.transcript_max_chars:
            logger.info(
                f"Truncating transcript from {len(transcript)} to {self.transcript_max_chars} characters"
            )
            transcript = transcript[: self.transcript_max_chars] + "..."

        prompt = TRANSCRIPT_ANALYZER.format(
            title=metadata.title,
            channel=metadata.channel,
            view_count=f"{metadata.view_count:,}",
            transcript=transcript,
        )

        logger.info(
            f"Analyzing transcript ({len(transcript)} chars, "
            f"prompt {PROMPT_VERSIONS['analyze_transcript']})"
        )
        response_text = self.llm.complete(prompt, model=self.analysis_model, temperature=0.4)

        try:
            analysis = parse_analysis_response(response_text)
        except SchemaMismatchError:
            logger.debug(f"Raw analysis response: {response_text}")
            raise

        logger.info(f"Analysis complete: niche='{analysis.niche}', pace='{analysis.pace}'")
        return analysis

    def generate_ideas(
        self, analysis: AnalysisResult, count: Optional[int] = None
    ) -> List[ContentIdea]:
        """Generate content ideas from an analysis.

        Args:
            analysis: Result of analyze_transcript()
            count: Number of ideas to request (defaults to idea_count)

        Returns:
            Ideas in generation order (at most count)

        Raises:
            SchemaMismatchError: If no idea could be parsed
            UpstreamUnavailableError: If the LLM is unconfigured or fails
        """
        count = count or self.idea_count
        prompt = IDEA_GENERATOR.format(
            analysis_json=json.dumps(analysis.to_dict(), indent=2),
            count=count,
        )

        logger.info(
            f"Generating {count} ideas (prompt {PROMPT_VERSIONS['generate_ideas']})"
        )
        response_text = self.llm.complete(prompt, model=self.ideas_model, temperature=0.8)

        try:
            ideas = parse_ideas_response(response_text)
        except SchemaMismatchError:
            logger.debug(f"Raw ideas response: {response_text}")
            raise

        logger.info(f"Generated {len(ideas)} ideas")
        return ideas[:count]
