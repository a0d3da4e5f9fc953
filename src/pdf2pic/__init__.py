"""Package initialization for pdf2pic."""

from pathlib import Path

from dotenv import load_dotenv

# Load .env at package initialization
PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
ENV_FILE_PATH = PROJECT_ROOT / ".env"

if ENV_FILE_PATH.exists():
    # Don't override existing env vars; values already set by the OS or deployment platform win.
    load_dotenv(ENV_FILE_PATH, override=False)

from pdf2pic.converter import PDF2Pic  # noqa: E402
from pdf2pic.schemas import Base64Result, ConversionOptions, ConversionResult  # noqa: E402

__all__ = ["PDF2Pic", "ConversionOptions", "ConversionResult", "Base64Result"]
