import pytest
from unittest.mock import MagicMock

from googleapiclient.errors import HttpError

from tubeharvest.config import Settings


# --- Canned API responses ---

CHANNEL_API_RESPONSE = {
    "kind": "youtube#channelListResponse",
    "items": [{"kind": "youtube#channel", "id": "UCXuqSBlHAE6Xw-yeJA0Tunw"}],
}

CHANNEL_API_EMPTY = {"kind": "youtube#channelListResponse", "pageInfo": {"totalResults": 0}}


def make_search_item(n: int, channel_id: str = "UCXuqSBlHAE6Xw-yeJA0Tunw") -> dict:
    return {
        "kind": "youtube#searchResult",
        "id": {"kind": "youtube#video", "videoId": f"vid{n:03d}"},
        "snippet": {
            "publishedAt": f"2025-01-{n + 1:02d}T12:00:00Z",
            "channelId": channel_id,
            "title": f"Video {n}",
            "description": f"Description {n}",
            "channelTitle": "Linus Tech Tips",
            "publishTime": f"2025-01-{n + 1:02d}T12:00:00Z",
        },
    }


SEARCH_API_RESPONSE = {"items": [make_search_item(n) for n in range(3)]}

SEARCH_API_TWELVE = {"items": [make_search_item(n) for n in range(12)]}

VIDEO_API_RESPONSE = {
    "items": [
        {
            "id": "vid000",
            "statistics": {
                "viewCount": "1500",
                "likeCount": "120",
                "favoriteCount": "0",
                "commentCount": "33",
            },
            "contentDetails": {"duration": "PT12M34S", "definition": "hd"},
        }
    ]
}

VALUES_API_RESPONSE = {
    "range": "Sheet1!C1:C7",
    "majorDimension": "ROWS",
    "values": [
        ["Channel"],
        ["https://www.youtube.com/@LinusTechTips"],
        ["  youtube.com/@mkbhd  "],
        ["https://example.com/@nope"],
        [],
        ["https://youtu.be/dQw4w9WgXcQ"],
        ["not a url"],
    ],
}

APPEND_API_RESPONSE = {
    "updates": {
        "updatedRange": "Sheet1!A1:L3",
        "updatedRows": 3,
        "updatedColumns": 12,
        "updatedCells": 36,
    }
}


def make_http_error(status: int) -> HttpError:
    resp = MagicMock()
    resp.status = status
    return HttpError(resp=resp, content=b"error")


@pytest.fixture
def settings(tmp_path):
    return Settings(
        google_api_key="test-key",
        google_sheets_id_input="sheet-in",
        google_sheets_id_output="sheet-out",
        google_application_credentials=tmp_path / "service_account.json",
        output_file=tmp_path / "videos.xlsx",
        _env_file=None,
    )


@pytest.fixture
def mock_youtube_service(mocker):
    """Fully mocked YouTube Data API service."""
    mock_svc = MagicMock()
    mocker.patch("tubeharvest.services.youtube.build", return_value=mock_svc)
    return mock_svc


@pytest.fixture
def mock_sheets_credentials(mocker):
    return mocker.patch("tubeharvest.services.sheets.get_sheets_credentials", return_value=MagicMock())


@pytest.fixture
def mock_sheets_build(mocker):
    mock_svc = MagicMock()
    mocker.patch("tubeharvest.services.sheets.build", return_value=mock_svc)
    return mock_svc


@pytest.fixture
def mock_sheets_service(mock_sheets_credentials, mock_sheets_build):
    """Fully mocked Sheets API service."""
    return mock_sheets_build
