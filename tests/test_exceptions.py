import pytest

from pdf2pic.exceptions import (
    ConversionError,
    InvalidPDFError,
    InvalidStreamPathError,
    PageOutOfRangeError,
    PDFFileNotFoundError,
    RasterizerError,
)


@pytest.mark.parametrize(
    "exc_class, kind",
    [
        (InvalidPDFError, "InvalidPDF"),
        (PDFFileNotFoundError, "FileNotFound"),
        (PageOutOfRangeError, "PageOutOfRange"),
        (InvalidStreamPathError, "InvalidStreamPath"),
        (RasterizerError, "AdapterError"),
    ],
)
def test_error_kinds(exc_class, kind):
    exc = exc_class()
    assert isinstance(exc, ConversionError)
    assert exc.error == kind
    assert exc.to_dict()["error"] == kind
    assert str(exc) == exc.message


def test_custom_message():
    exc = PageOutOfRangeError("page 9 of 3")
    assert exc.message == "page 9 of 3"
    assert exc.to_dict() == {"error": "PageOutOfRange", "message": "page 9 of 3"}
