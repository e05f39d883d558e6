"""Video-related data models."""

from dataclasses import asdict, dataclass, field
from typing import List


@dataclass(frozen=True)
class VideoReference:
    """A YouTube video identified by its 11-character id."""

    video_id: str
    url: str  # URL as submitted by the caller

    @property
    def watch_url(self) -> str:
        """Canonical watch URL for this video."""
        return f"https://www.youtube.com/watch?v={self.video_id}"


@dataclass(frozen=True)
class VideoMetadata:
    """Video metadata from the YouTube Data API."""

    video_id: str
    title: str
    channel: str
    view_count: int
    published_at: str  # ISO 8601 timestamp
    duration_seconds: int
    description: str = ""
    like_count: int = 0
    channel_id: str = ""
    tags: List[str] = field(default_factory=list)

    def __post_init__(self):
        if self.view_count < 0:
            raise ValueError(f"view_count must be >= 0, got {self.view_count}")
        if self.duration_seconds < 0:
            raise ValueError(f"duration_seconds must be >= 0, got {self.duration_seconds}")

    def to_dict(self) -> dict:
        """Convert to the JSON shape returned by the API."""
        data = asdict(self)
        return {
            "id": data["video_id"],
            "title": data["title"],
            "channel": data["channel"],
            "channelId": data["channel_id"],
            "viewCount": data["view_count"],
            "likeCount": data["like_count"],
            "publishedAt": data["published_at"],
            "durationSeconds": data["duration_seconds"],
            "description": data["description"],
            "tags": data["tags"],
        }
