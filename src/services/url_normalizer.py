"""Extract YouTube video ids from the URL shapes users paste."""

import re

from models.video import VideoReference
from services.errors import InvalidInputError

_ID = r"(?P<id>[A-Za-z0-9_-]{11})(?![A-Za-z0-9_-])"
_HOST = r"^(?:https?://)?(?:(?:www|m|music)\.)?"

# Anchored at the start of the input; checked in order, the first match wins
VIDEO_URL_PATTERNS = [
    re.compile(_HOST + r"youtube\.com/watch\?(?:[^#]*&)?v=" + _ID),
    re.compile(_HOST + r"youtu\.be/" + _ID),
    re.compile(_HOST + r"youtube(?:-nocookie)?\.com/embed/" + _ID),
    re.compile(_HOST + r"youtube\.com/v/" + _ID),
    re.compile(_HOST + r"youtube\.com/shorts/" + _ID),
    re.compile(_HOST + r"youtube\.com/live/" + _ID),
    re.compile(_HOST + r"youtube\.com/[^?#]*\?(?:[^#]*&)?v=" + _ID),
]


def extract_video_id(url: str) -> VideoReference:
    """Extract the 11-character video id from a YouTube URL.

    Args:
        url: A watch, short-link, embed, shorts or live URL

    Returns:
        VideoReference with the extracted id and the original URL

    Raises:
        InvalidInputError: If the input matches no known video URL shape
    """
    if not url or not url.strip():
        raise InvalidInputError("Video URL is required")

    candidate = url.strip()
    for pattern in VIDEO_URL_PATTERNS:
        match = pattern.match(candidate)
        if match:
            return VideoReference(video_id=match.group("id"), url=candidate)

    raise InvalidInputError("Invalid YouTube URL format", details=candidate)
