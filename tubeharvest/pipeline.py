"""Aggregation pipeline: channel URLs in, one flat row per recent video out.

Each input URL goes through handle extraction, channel resolution, the catalog
fetch and per-video enrichment, strictly in sequence. A URL that fails a step is
skipped with a logged reason. A video whose details cannot be fetched is still
emitted, just without statistics.
"""

import logging

from tubeharvest.config import Settings
from tubeharvest.exceptions import AuthenticationError, IntegrationError, RateLimitError
from tubeharvest.models.youtube import OutputRow, VideoDetail, VideoSummary
from tubeharvest.services import excel as excel_service
from tubeharvest.services import sheets as sheets_service
from tubeharvest.services import youtube as youtube_service

logger = logging.getLogger(__name__)


def _enrich(summary: VideoSummary, detail: VideoDetail | None) -> OutputRow:
    row = OutputRow(**summary.model_dump())
    if detail is None:
        return row
    row.view_count = detail.view_count
    row.like_count = detail.like_count
    row.comment_count = detail.comment_count
    row.duration = detail.duration
    if detail.duration is not None:
        row.readable_duration = youtube_service.parse_duration(detail.duration)
    return row


def process_url(url: str, settings: Settings) -> list[OutputRow]:
    """Run one input URL through the pipeline. Never raises for per-item failures."""
    handle = youtube_service.extract_handle(url)
    if not handle:
        logger.warning("Skipped %s: invalid URL", url)
        return []

    channel_id = youtube_service.resolve_channel_id(
        handle, settings.google_api_key, num_retries=settings.api_num_retries
    )
    if not channel_id:
        logger.warning("Skipped %s: channel not found for handle %s", url, handle)
        return []

    videos = youtube_service.fetch_recent_videos(
        channel_id,
        settings.google_api_key,
        max_results=settings.max_videos,
        num_retries=settings.api_num_retries,
    )
    logger.info("Fetched %d videos for @%s (%s)", len(videos), handle, channel_id)

    rows = []
    for video in videos:
        detail = youtube_service.fetch_video_detail(
            video.video_id, settings.google_api_key, num_retries=settings.api_num_retries
        )
        if detail is None:
            logger.warning("Emitting %s without statistics", video.url)
        rows.append(_enrich(video, detail))
    return rows


def collect_videos(urls: list[str], settings: Settings) -> list[OutputRow]:
    """Process at most ``settings.max_channels`` URLs, in input order."""
    all_videos: list[OutputRow] = []
    for url in urls[: settings.max_channels]:
        all_videos.extend(process_url(url, settings))
    return all_videos


def run(settings: Settings) -> list[OutputRow]:
    """Read channel URLs from the input sheet, collect their videos and write the results."""
    urls = sheets_service.read_channel_urls(
        settings.google_sheets_id_input,
        settings.input_range,
        settings.google_application_credentials,
        num_retries=settings.api_num_retries,
    )
    if not urls:
        logger.info("No YouTube URLs found in the input sheet.")
        return []
    if len(urls) > settings.max_channels:
        logger.info("Processing the first %d of %d URLs", settings.max_channels, len(urls))

    videos = collect_videos(urls, settings)
    try:
        excel_service.write_videos_excel(settings.output_file, videos)
    except (OSError, ValueError) as e:
        logger.error("Error writing to Excel file %s: %s", settings.output_file, e)

    if settings.write_output_sheet and videos:
        values = [excel_service.output_header()] + [
            [str(cell) for cell in row] for row in excel_service.rows_to_values(videos)
        ]
        try:
            result = sheets_service.append_rows(
                settings.google_sheets_id_output,
                settings.output_range,
                values,
                settings.google_application_credentials,
                num_retries=settings.api_num_retries,
            )
        except (AuthenticationError, IntegrationError, RateLimitError) as e:
            logger.error("Error writing to Google Sheets %s: %s", settings.google_sheets_id_output, e)
        else:
            logger.info("Appended %d rows to Google Sheets %s", result.updated_rows, settings.google_sheets_id_output)
    return videos
