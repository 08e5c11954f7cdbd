import logging
import re

from googleapiclient.discovery import build
from googleapiclient.errors import HttpError
from httplib2 import HttpLib2Error

from tubeharvest.exceptions import AuthenticationError, IntegrationError, RateLimitError
from tubeharvest.models.youtube import VideoDetail, VideoSummary

logger = logging.getLogger(__name__)

HANDLE_PATTERN = re.compile(r"youtube\.com/@([A-Za-z0-9_-]+)")
DURATION_PATTERN = re.compile(r"PT(?=\d)(?:(\d+)H)?(?:(\d+)M)?(?:(\d+)S)?")

MAX_RECENT_VIDEOS = 10

# Remote-call and payload failures; all of them degrade to "absent".
_SOFT_FAILURES = (
    AuthenticationError,
    IntegrationError,
    RateLimitError,
    HttpLib2Error,
    OSError,
    ValueError,
)


def _get_youtube_service(api_key: str):
    if not api_key:
        raise AuthenticationError("YouTube API key is missing. Set GOOGLE_API_KEY in your .env file.")
    return build("youtube", "v3", developerKey=api_key)


def _handle_api_error(e: HttpError):
    if e.resp.status == 429:
        raise RateLimitError("YouTube API rate limit exceeded. Try again shortly.") from e
    if e.resp.status in (401, 403):
        raise AuthenticationError(
            "YouTube API key rejected or quota exhausted. Check GOOGLE_API_KEY."
        ) from e
    raise IntegrationError(f"YouTube API error: {e}") from e


def _execute(request, num_retries: int = 0) -> dict:
    try:
        return request.execute(num_retries=num_retries)
    except HttpError as e:
        _handle_api_error(e)


def _video_url(video_id: str) -> str:
    return f"https://www.youtube.com/watch?v={video_id}"


def _count(stats: dict, key: str) -> int | None:
    return int(stats[key]) if key in stats else None


def extract_handle(url: str) -> str | None:
    """Return the channel handle from a ``youtube.com/@handle`` URL, or None."""
    match = HANDLE_PATTERN.search(url)
    return match.group(1) if match else None


def resolve_channel_id(handle: str, api_key: str, num_retries: int = 0) -> str | None:
    """Look up the channel id for a handle.

    Not-found and transport failures both come back as None; the reason is only logged.
    """
    try:
        service = _get_youtube_service(api_key)
        result = _execute(
            service.channels().list(part="id", forHandle=handle),
            num_retries,
        )
        items = result.get("items") or []
        if not items:
            logger.warning("No channel matches handle %s", handle)
            return None
        channel_id = items[0].get("id")
        if not channel_id:
            logger.warning("Channel lookup for %s returned an item without an id", handle)
            return None
        return channel_id
    except _SOFT_FAILURES as e:
        logger.error("Error fetching channel ID for %s: %s", handle, e)
        return None


def fetch_recent_videos(
    channel_id: str,
    api_key: str,
    max_results: int = MAX_RECENT_VIDEOS,
    num_retries: int = 0,
) -> list[VideoSummary]:
    """Fetch up to ``max_results`` recent videos of a channel, in upstream order.

    Returns an empty list on any failure so one channel cannot abort a run.
    """
    try:
        service = _get_youtube_service(api_key)
        result = _execute(
            service.search().list(
                channelId=channel_id,
                part="snippet",
                type="video",
                maxResults=max_results,
            ),
            num_retries,
        )
        videos = []
        for item in (result.get("items") or [])[:max_results]:
            video_id = (item.get("id") or {}).get("videoId")
            if not video_id:
                logger.warning("Skipping search result without a video id in channel %s", channel_id)
                continue
            snippet = item.get("snippet", {})
            videos.append(VideoSummary(
                video_id=video_id,
                title=snippet.get("title", ""),
                url=_video_url(video_id),
                channel_id=snippet.get("channelId", channel_id),
                description=snippet.get("description", ""),
                channel_title=snippet.get("channelTitle", ""),
                published_at=snippet.get("publishedAt", ""),
                publish_time=snippet.get("publishTime", ""),
            ))
        return videos
    except _SOFT_FAILURES as e:
        logger.error("Error fetching videos for channel %s: %s", channel_id, e)
        return []


def fetch_video_detail(video_id: str, api_key: str, num_retries: int = 0) -> VideoDetail | None:
    """Fetch statistics and duration for one video, or None if unavailable."""
    try:
        service = _get_youtube_service(api_key)
        result = _execute(
            service.videos().list(part="statistics,contentDetails", id=video_id),
            num_retries,
        )
        items = result.get("items") or []
        if not items:
            logger.warning("No details returned for video %s", video_id)
            return None
        item = items[0]
        stats = item.get("statistics", {})
        content = item.get("contentDetails", {})
        return VideoDetail(
            video_id=item.get("id", video_id),
            view_count=_count(stats, "viewCount"),
            like_count=_count(stats, "likeCount"),
            comment_count=_count(stats, "commentCount"),
            duration=content.get("duration"),
        )
    except _SOFT_FAILURES as e:
        logger.error("Error fetching details for video %s: %s", video_id, e)
        return None


def parse_duration(raw: str) -> str:
    """Render a ``PT#H#M#S`` duration as ``"1h 2m 3s"``.

    Zero components are dropped, so ``PT0S`` becomes ``""``. Anything that is not
    of that form, including a bare ``PT``, is returned untouched.
    """
    match = DURATION_PATTERN.fullmatch(raw)
    if not match:
        return raw
    hours, minutes, seconds = (int(g) if g else 0 for g in match.groups())
    readable = ""
    if hours:
        readable += f"{hours}h "
    if minutes:
        readable += f"{minutes}m "
    if seconds:
        readable += f"{seconds}s"
    return readable.rstrip()
