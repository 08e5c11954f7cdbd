from fastapi import APIRouter

from tubeharvest import pipeline
from tubeharvest.config import get_settings
from tubeharvest.models.collect import CollectRequest, CollectResponse

router = APIRouter(prefix="/api", tags=["collect"])


@router.post("/collect")
def collect(request: CollectRequest) -> CollectResponse:
    """Run the pipeline over the given URLs without writing any output."""
    settings = get_settings()
    processed = request.urls[: settings.max_channels]
    return CollectResponse(
        processed_urls=processed,
        videos=pipeline.collect_videos(processed, settings),
    )
