"""Exceptions raised while converting PDF pages to images."""


class ConversionError(Exception):
    """Base class for conversion errors.

    Every subclass carries an ``error`` kind tag alongside its ``message`` so
    callers can branch on the kind without matching on class names.
    """

    error = "ConversionError"
    default_message = "PDF conversion failed"

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self):
        """Returns the error as a plain ``{"error", "message"}`` record."""
        return {"error": self.error, "message": self.message}


class InvalidPDFError(ConversionError):
    """Raised when the supplied path does not end in ``.pdf``."""

    error = "InvalidPDF"
    default_message = "File supplied is not a valid PDF"


class PDFFileNotFoundError(ConversionError):
    """Raised when nothing exists at the supplied path."""

    error = "FileNotFound"
    default_message = "File supplied cannot be found"


class PageOutOfRangeError(ConversionError):
    """Raised when a requested page does not exist in the document."""

    error = "PageOutOfRange"
    default_message = "Cannot convert non-existent page"


class InvalidStreamPathError(ConversionError):
    """Raised when a PDF stream has no file path attached."""

    error = "InvalidStreamPath"
    default_message = "Invalid Path"


class RasterizerError(ConversionError):
    """Raised when poppler or Pillow fails to identify or render a page."""

    error = "AdapterError"
    default_message = "Rasterizer failed"
