from fastapi import APIRouter, HTTPException

from tubeharvest.config import get_settings
from tubeharvest.models.youtube import (
    ChannelIdResult,
    DurationResult,
    HandleResult,
    VideoDetail,
    VideoSummary,
)
from tubeharvest.services import youtube as youtube_service

router = APIRouter(prefix="/api/youtube", tags=["youtube"])


@router.get("/handle")
def extract_handle(url: str) -> HandleResult:
    return HandleResult(url=url, handle=youtube_service.extract_handle(url))


@router.get("/handles/{handle}/channel")
def resolve_channel_id(handle: str) -> ChannelIdResult:
    settings = get_settings()
    channel_id = youtube_service.resolve_channel_id(
        handle, settings.google_api_key, num_retries=settings.api_num_retries
    )
    if not channel_id:
        raise HTTPException(status_code=404, detail=f"Channel not found for handle: {handle}")
    return ChannelIdResult(handle=handle, channel_id=channel_id)


@router.get("/channels/{channel_id}/videos")
def fetch_recent_videos(channel_id: str, max_results: int | None = None) -> list[VideoSummary]:
    settings = get_settings()
    limit = min(max_results or settings.max_videos, settings.max_videos)
    return youtube_service.fetch_recent_videos(
        channel_id, settings.google_api_key, max_results=limit, num_retries=settings.api_num_retries
    )


@router.get("/videos/{video_id}")
def fetch_video_detail(video_id: str) -> VideoDetail:
    settings = get_settings()
    detail = youtube_service.fetch_video_detail(
        video_id, settings.google_api_key, num_retries=settings.api_num_retries
    )
    if detail is None:
        raise HTTPException(status_code=404, detail=f"Video not found: {video_id}")
    return detail


@router.get("/duration")
def parse_duration(value: str) -> DurationResult:
    return DurationResult(value=value, readable=youtube_service.parse_duration(value))
