"""YouTube Data API Service for video metadata and caption tracks.

Uses the official YouTube Data API v3. Quota costs per call:
- videos.list: 1 unit
- captions.list: 50 units
- captions.download: 200 units (requires OAuth for most videos; an API key
  alone is usually rejected, in which case the caller falls through to the
  next transcript source)
"""

import logging
import re
import threading
from typing import Dict, List, Optional

from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from models.video import VideoMetadata
from services.errors import UpstreamUnavailableError

logger = logging.getLogger(__name__)

_ISO_DURATION = re.compile(
    r"^P(?:(?P<days>\d+)D)?"
    r"(?:T(?:(?P<hours>\d+)H)?(?:(?P<minutes>\d+)M)?(?:(?P<seconds>\d+(?:\.\d+)?)S)?)?$"
)


def parse_iso_duration(duration: str) -> int:
    """Parse ISO 8601 duration to seconds.

    Args:
        duration: Duration string like "PT5M30S", "PT1H2M3S" or "P1DT2H"

    Returns:
        Duration in seconds (0 when the string is empty or malformed)
    """
    if not duration:
        return 0
    match = _ISO_DURATION.match(duration)
    if not match:
        return 0

    parts = {k: float(v) for k, v in match.groupdict().items() if v}
    return int(
        parts.get("days", 0) * 86400
        + parts.get("hours", 0) * 3600
        + parts.get("minutes", 0) * 60
        + parts.get("seconds", 0)
    )


class YouTubeAPIService:
    """Service for interacting with YouTube Data API v3."""

    QUOTA_VIDEOS = 1
    QUOTA_CAPTIONS_LIST = 50
    QUOTA_CAPTIONS_DOWNLOAD = 200

    def __init__(self, api_key: Optional[str]):
        """Initialize the YouTube API service.

        Args:
            api_key: YouTube Data API v3 key. The client is only built when
                a key is present; calls without one raise UpstreamUnavailableError.
        """
        self.api_key = api_key
        self.youtube = build("youtube", "v3", developerKey=api_key) if api_key else None
        self._quota_used = 0
        self._lock = threading.RLock()

    @property
    def quota_used(self) -> int:
        """Get total quota units used in this process."""
        return self._quota_used

    def is_configured(self) -> bool:
        return self.youtube is not None

    def _require_client(self):
        if self.youtube is None:
            raise UpstreamUnavailableError(
                "YouTube API key not configured",
                details="Set the YOUTUBE_API_KEY environment variable.",
            )
        return self.youtube

    def _execute_request(self, request, quota: int):
        """Execute an API request with thread safety and quota accounting."""
        with self._lock:
            response = request.execute()
            self._quota_used += quota
            return response

    def get_video_metadata(self, video_id: str) -> VideoMetadata:
        """Fetch title, channel, statistics and duration for one video.

        Args:
            video_id: 11-character YouTube video id

        Returns:
            VideoMetadata for the video

        Raises:
            UpstreamUnavailableError: If the key is missing, the API call
                fails, or the video does not exist
        """
        youtube = self._require_client()

        try:
            request = youtube.videos().list(
                part="snippet,statistics,contentDetails",
                id=video_id,
            )
            response = self._execute_request(request, self.QUOTA_VIDEOS)
        except HttpError as e:
            logger.error(f"YouTube API error getting metadata for {video_id}: {e}")
            raise UpstreamUnavailableError(
                "Failed to fetch video metadata", details=str(e)
            ) from e
        except Exception as e:
            logger.error(f"Error getting metadata for {video_id}: {e}")
            raise UpstreamUnavailableError(
                "Failed to fetch video metadata", details=str(e)
            ) from e

        items = response.get("items", [])
        if not items:
            raise UpstreamUnavailableError(
                "Failed to fetch video metadata",
                details=f"Video {video_id} not found or not public",
            )

        item = items[0]
        snippet = item.get("snippet", {})
        stats = item.get("statistics", {})
        content = item.get("contentDetails", {})

        metadata = VideoMetadata(
            video_id=item.get("id", video_id),
            title=snippet.get("title", ""),
            channel=snippet.get("channelTitle", ""),
            channel_id=snippet.get("channelId", ""),
            view_count=int(stats.get("viewCount", 0)),
            like_count=int(stats.get("likeCount", 0)),
            published_at=snippet.get("publishedAt", ""),
            duration_seconds=parse_iso_duration(content.get("duration", "")),
            description=snippet.get("description", ""),
            tags=list(snippet.get("tags", [])),
        )
        logger.info(
            f"Fetched metadata for {video_id}: '{metadata.title}' "
            f"({metadata.view_count:,} views, {metadata.duration_seconds}s)"
        )
        return metadata

    def list_captions(self, video_id: str) -> List[Dict[str, str]]:
        """List caption tracks for a video.

        Returns:
            List of dicts with "id", "language" and "track_kind" keys
        """
        youtube = self._require_client()
        request = youtube.captions().list(part="snippet", videoId=video_id)
        response = self._execute_request(request, self.QUOTA_CAPTIONS_LIST)

        tracks = []
        for item in response.get("items", []):
            snippet = item.get("snippet", {})
            tracks.append(
                {
                    "id": item["id"],
                    "language": snippet.get("language", ""),
                    "track_kind": snippet.get("trackKind", ""),
                }
            )
        return tracks

    def download_caption(self, caption_id: str) -> str:
        """Download a caption track as SRT text."""
        youtube = self._require_client()
        request = youtube.captions().download(id=caption_id, tfmt="srt")
        payload = self._execute_request(request, self.QUOTA_CAPTIONS_DOWNLOAD)
        if isinstance(payload, bytes):
            return payload.decode("utf-8", errors="replace")
        return str(payload)
