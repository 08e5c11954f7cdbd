from pathlib import Path

from google.oauth2 import service_account

from tubeharvest.exceptions import AuthenticationError

INTEGRATION_SCOPES = {
    "sheets": [
        "https://www.googleapis.com/auth/spreadsheets",
        "https://www.googleapis.com/auth/drive",
    ],
}


def _get_credentials(integration: str, credentials_file: Path) -> service_account.Credentials:
    """Load service-account credentials for an integration, raising if the key file is unusable."""
    path = Path(credentials_file)
    if not path.exists():
        raise AuthenticationError(
            f"Service account key file not found at {path}. "
            "Point GOOGLE_APPLICATION_CREDENTIALS at a key downloaded from Google Cloud Console."
        )
    try:
        return service_account.Credentials.from_service_account_file(
            str(path), scopes=INTEGRATION_SCOPES[integration]
        )
    except ValueError as e:
        raise AuthenticationError(f"Invalid service account key file {path}: {e}") from e


def get_sheets_credentials(credentials_file: Path) -> service_account.Credentials:
    return _get_credentials("sheets", credentials_file)
