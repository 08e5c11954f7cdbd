import logging
import re
from pathlib import Path

from google.auth.exceptions import GoogleAuthError
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError
from httplib2 import HttpLib2Error

from tubeharvest.auth import get_sheets_credentials
from tubeharvest.exceptions import AuthenticationError, IntegrationError, RateLimitError
from tubeharvest.models.sheets import ReadRangeResponse, WriteRangeResponse

logger = logging.getLogger(__name__)

YOUTUBE_URL_PATTERN = re.compile(r"(https?://)?(www\.)?(youtube\.com|youtu\.be)/\S+", re.IGNORECASE)


def _get_sheets_service(credentials_file: Path):
    try:
        creds = get_sheets_credentials(credentials_file)
    except AuthenticationError:
        raise
    except Exception as e:
        raise AuthenticationError(f"Failed to obtain Sheets credentials: {e}.") from e
    return build("sheets", "v4", credentials=creds)


def _handle_api_error(e: HttpError):
    if e.resp.status == 429:
        raise RateLimitError("Sheets API rate limit exceeded. Try again shortly.") from e
    if e.resp.status in (401, 403):
        raise AuthenticationError(
            "Sheets access denied. Share the spreadsheet with the service account email."
        ) from e
    raise IntegrationError(f"Sheets API error: {e}") from e


def _handle_auth_error(e: GoogleAuthError):
    raise AuthenticationError(f"Sheets service account token could not be refreshed: {e}") from e


def read_range(spreadsheet_id: str, range: str, credentials_file: Path, num_retries: int = 0) -> ReadRangeResponse:
    """Read a range of cells (e.g. 'Sheet1!C:C')."""
    service = _get_sheets_service(credentials_file)
    try:
        result = service.spreadsheets().values().get(
            spreadsheetId=spreadsheet_id, range=range
        ).execute(num_retries=num_retries)
        return ReadRangeResponse(
            spreadsheet_id=spreadsheet_id,
            range=result.get("range", range),
            values=result.get("values", []),
        )
    except HttpError as e:
        _handle_api_error(e)
    except GoogleAuthError as e:
        _handle_auth_error(e)


def read_channel_urls(spreadsheet_id: str, range: str, credentials_file: Path, num_retries: int = 0) -> list[str]:
    """Return the trimmed YouTube URLs found in a range, in sheet order.

    Non-URL cells are dropped. A failed read is logged and yields an empty list.
    """
    try:
        response = read_range(spreadsheet_id, range, credentials_file, num_retries=num_retries)
    except (AuthenticationError, IntegrationError, RateLimitError, HttpLib2Error, OSError) as e:
        logger.error("Error reading Google Sheets %s (%s): %s", spreadsheet_id, range, e)
        return []
    cells = (str(cell).strip() for row in response.values for cell in row)
    return [cell for cell in cells if cell and YOUTUBE_URL_PATTERN.search(cell)]


def append_rows(
    spreadsheet_id: str,
    range: str,
    values: list[list[str]],
    credentials_file: Path,
    num_retries: int = 0,
) -> WriteRangeResponse:
    """Append rows after the last row with data in the range."""
    service = _get_sheets_service(credentials_file)
    try:
        result = service.spreadsheets().values().append(
            spreadsheetId=spreadsheet_id,
            range=range,
            valueInputOption="RAW",
            insertDataOption="INSERT_ROWS",
            body={"values": values},
        ).execute(num_retries=num_retries)
        updates = result.get("updates", {})
        return WriteRangeResponse(
            spreadsheet_id=spreadsheet_id,
            updated_range=updates.get("updatedRange", range),
            updated_rows=updates.get("updatedRows", 0),
            updated_columns=updates.get("updatedColumns", 0),
            updated_cells=updates.get("updatedCells", 0),
        )
    except HttpError as e:
        _handle_api_error(e)
    except GoogleAuthError as e:
        _handle_auth_error(e)
