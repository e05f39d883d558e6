"""Base utilities for prompts module.

Helpers for turning raw LLM text into something json.loads accepts.
"""

import re

_FENCE = re.compile(r"^```(?:json|JSON)?\s*|\s*```$")


def strip_markdown_code_blocks(text: str) -> str:
    """Strip a surrounding markdown code fence from AI response text.

    Args:
        text: Raw text that may be wrapped in ```json ... ```

    Returns:
        Text with the fence removed
    """
    return _FENCE.sub("", text.strip()).strip()


def extract_json_block(text: str, opener: str = "{") -> str | None:
    """Return the outermost JSON object or array embedded in prose.

    Args:
        text: Response text that may include commentary around the JSON
        opener: "{" for an object, "[" for an array

    Returns:
        The substring from the first opener to the last matching closer,
        or None if either is missing
    """
    closer = "}" if opener == "{" else "]"
    start = text.find(opener)
    end = text.rfind(closer)
    if start == -1 or end <= start:
        return None
    return text[start : end + 1]
