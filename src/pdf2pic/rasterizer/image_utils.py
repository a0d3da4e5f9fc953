"""Helpers translating conversion options into Pillow calls."""

import re
from typing import Optional, Tuple

from PIL import Image, ImageOps

from pdf2pic.exceptions import InvalidStreamPathError, RasterizerError

SIZE_PATTERN = re.compile(r"^(?P<width>\d+)?(?:x(?P<height>\d+)?)?(?P<exact>!)?$")

# File extensions whose Pillow format name differs from the upper-cased extension
PIL_FORMATS = {
    "jpg": "JPEG",
    "jpe": "JPEG",
    "tif": "TIFF",
}

TIFF_COMPRESSION = {
    "none": "raw",
    "jpeg": "jpeg",
    "lzw": "tiff_lzw",
    "zip": "tiff_adobe_deflate",
    "group4": "group4",
}


def parse_size(size: str) -> Tuple[Optional[int], Optional[int], bool]:
    """Parses a geometry string such as ``768x512``, ``768``, ``x512`` or ``768x512!``.

    Returns:
        tuple: (width, height, exact). A missing dimension is None.

    Raises:
        RasterizerError: If the string is not a geometry.
    """
    match = SIZE_PATTERN.match(size.strip())
    if not match or not (match.group("width") or match.group("height")):
        raise RasterizerError(f"Invalid size '{size}', expected WIDTHxHEIGHT")
    width = int(match.group("width")) if match.group("width") else None
    height = int(match.group("height")) if match.group("height") else None
    if width == 0 or height == 0:
        raise RasterizerError(f"Invalid size '{size}', dimensions must be positive")
    return width, height, bool(match.group("exact"))


def resize_image(image: Image.Image, size: str) -> Image.Image:
    """Scales the image to fit the geometry, keeping aspect ratio unless it ends in ``!``."""
    width, height, exact = parse_size(size)
    if width and height:
        if exact:
            return image.resize((width, height))
        return ImageOps.contain(image, (width, height))
    # Only one side given: scale proportionally on that side
    if width:
        return image.resize((width, max(1, round(image.height * width / image.width))))
    return image.resize((max(1, round(image.width * height / image.height)), height))


def pil_format(extension: str) -> str:
    """Maps a file extension (``png``, ``jpg``) to a Pillow format name."""
    extension = extension.lower().lstrip(".")
    return PIL_FORMATS.get(extension, extension.upper())


def save_options(pil_format_name: str, quality: int, compression: str) -> dict:
    """Builds the keyword arguments passed to ``Image.save``.

    A quality of 0 keeps the encoder default. Compression only reaches the
    TIFF encoder, but an unknown value is rejected for every format.

    Raises:
        RasterizerError: If the compression is not one of TIFF_COMPRESSION.
    """
    if compression and compression.lower() not in TIFF_COMPRESSION:
        raise RasterizerError(
            f"Unsupported compression '{compression}', expected one of {', '.join(TIFF_COMPRESSION)}"
        )
    options = {}
    if pil_format_name in ("JPEG", "WEBP") and quality:
        options["quality"] = min(quality, 100)
    elif pil_format_name == "PNG" and quality:
        # zlib level lives in the tens digit, as with ImageMagick's -quality for PNG
        options["compress_level"] = min(quality // 10, 9)
    if pil_format_name == "TIFF" and compression:
        options["compression"] = TIFF_COMPRESSION[compression.lower()]
    return options


def stream_path(stream) -> str:
    """Returns the file path a PDF stream was opened from.

    Raises:
        InvalidStreamPathError: If there is no stream or it has no path.
    """
    path = getattr(stream, "name", None) if stream is not None else None
    if not path or not isinstance(path, str):
        raise InvalidStreamPathError()
    return path
