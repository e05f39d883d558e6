"""Prompts module - centralized prompt templates for AI services.

Re-exports all prompt constants and utilities for easy importing:
    from services.prompts import PROMPT_VERSIONS, strip_markdown_code_blocks
    from services.prompts import TRANSCRIPT_ANALYZER, IDEA_GENERATOR
"""

from services.prompts._base import extract_json_block, strip_markdown_code_blocks
from services.prompts.analysis import IDEA_GENERATOR, TRANSCRIPT_ANALYZER

# Prompt version identifiers, logged with each call
# Increment these when prompts change
PROMPT_VERSIONS = {
    "analyze_transcript": "v1",
    "generate_ideas": "v1",
}

__all__ = [
    # Utilities
    "strip_markdown_code_blocks",
    "extract_json_block",
    # Version tracking
    "PROMPT_VERSIONS",
    # Analysis prompts
    "TRANSCRIPT_ANALYZER",
    "IDEA_GENERATOR",
]
