from functools import lru_cache
from pathlib import Path

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings

from tubeharvest.exceptions import ConfigurationError


class Settings(BaseSettings):
    google_api_key: str = Field(min_length=1)
    google_sheets_id_input: str = Field(min_length=1)
    google_sheets_id_output: str = Field(min_length=1)
    google_application_credentials: Path

    input_range: str = "C:C"
    output_range: str = "A1"
    output_file: Path = Path("videos.xlsx")
    write_output_sheet: bool = False

    # Quota guards
    max_channels: int = 5
    max_videos: int = 10
    api_num_retries: int = 0

    host: str = "127.0.0.1"
    port: int = 9000
    log_level: str = "INFO"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}

    @field_validator("google_application_credentials", mode="before")
    @classmethod
    def _credentials_not_blank(cls, value):
        if isinstance(value, str) and not value.strip():
            raise ValueError("must not be empty")
        return value


def load_settings(**overrides) -> Settings:
    """Build settings from the environment, failing fast on missing values."""
    try:
        return Settings(**overrides)
    except ValidationError as e:
        missing = sorted({str(err["loc"][0]).upper() for err in e.errors() if err.get("loc")})
        raise ConfigurationError(
            f"Missing or invalid configuration: {', '.join(missing)}. "
            "Set them in your environment or .env file."
        ) from e


@lru_cache
def get_settings() -> Settings:
    return load_settings()
