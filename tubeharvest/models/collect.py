from pydantic import BaseModel

from tubeharvest.models.youtube import OutputRow


class CollectRequest(BaseModel):
    urls: list[str]


class CollectResponse(BaseModel):
    processed_urls: list[str]
    videos: list[OutputRow]
