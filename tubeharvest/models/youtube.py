from pydantic import BaseModel


class VideoSummary(BaseModel):
    video_id: str
    title: str
    url: str
    channel_id: str
    description: str
    channel_title: str
    published_at: str
    publish_time: str


class VideoDetail(BaseModel):
    video_id: str
    view_count: int | None = None
    like_count: int | None = None
    comment_count: int | None = None
    duration: str | None = None


class OutputRow(VideoSummary):
    view_count: int | None = None
    like_count: int | None = None
    comment_count: int | None = None
    duration: str | None = None
    readable_duration: str | None = None


class HandleResult(BaseModel):
    url: str
    handle: str | None = None


class ChannelIdResult(BaseModel):
    handle: str
    channel_id: str


class DurationResult(BaseModel):
    value: str
    readable: str
