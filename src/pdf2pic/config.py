"""Configuration settings for the PDF to image converter."""

from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

# Order of priority for pydantic-settings:
#
# 1. Arguments to the Initializer (Highest Priority - rarely used):
#    e.g. Settings(LOG_LEVEL="DEBUG").
#
# 2. System Environment Variables:
#    Example: export MAX_CONCURRENT_CONVERSIONS=4 before running the script.
#
# 3. .env File Values:
#    If env_file=".env" is specified in model_config, Pydantic reads from the .env file.
#
# 4. Default Values in the Class (Lowest Priority).

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
ENV_FILE_PATH = PROJECT_ROOT / ".env"


class Settings(BaseSettings):  # type: ignore
    """Configuration settings for the converter."""

    model_config = SettingsConfigDict(
        # Only load .env if it exists (local dev)
        env_file=str(ENV_FILE_PATH) if ENV_FILE_PATH.exists() else None,
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    # -- poppler --
    # Directory holding pdftoppm/pdfinfo when they are not on PATH (Windows, custom builds)
    POPPLER_PATH: Optional[str] = None
    PDF2IMAGE_TIMEOUT_SECONDS: Optional[int] = None

    # Upper bound on concurrent page conversions in a bulk call, 0 means unbounded
    MAX_CONCURRENT_CONVERSIONS: int = 0

    LOG_LEVEL: str = "INFO"


settings = Settings()
