"""Checks run on a PDF path before any rasterizer call."""

import logging
import os

from pdf2pic.exceptions import InvalidPDFError, PDFFileNotFoundError

logger = logging.getLogger(__name__)

PDF_EXTENSION = ".pdf"


def is_valid_pdf(pdf_path) -> bool:
    """Checks that the supplied file has the exact ``.pdf`` extension.

    The comparison is case-sensitive: ``report.PDF`` is rejected.

    Raises:
        InvalidPDFError: If the extension is anything other than ``.pdf``.
    """
    _, extension = os.path.splitext(os.path.basename(os.fspath(pdf_path)))
    if extension != PDF_EXTENSION:
        logger.error(f"Rejected '{pdf_path}': extension '{extension}' is not '{PDF_EXTENSION}'")
        raise InvalidPDFError()
    return True


def file_exists(pdf_path) -> bool:
    """Checks that something exists at the supplied path.

    Raises:
        PDFFileNotFoundError: If the path does not exist.
    """
    if not os.path.exists(pdf_path):
        logger.error(f"File not found: '{pdf_path}'")
        raise PDFFileNotFoundError()
    return True
