"""Renders single PDF pages to image files or base64 strings.

Classes:
    Rasterizer: Wraps pdf2image (poppler) for page rendering and metadata, and
        Pillow for resizing and encoding.

Methods:
    Rasterizer.identify(pdf_path, directive=None):
        Returns the pdfinfo metadata, or one directive token per page.

    Rasterizer.write(stream, page_index, output_path):
        Renders one zero-based page and writes it to output_path.

    Rasterizer.to_base64(stream, page_index, image_format):
        Renders one zero-based page and returns it base64 encoded.
"""

import base64
import io
import logging
import os
from typing import Optional

from PIL import Image
from pdf2image import convert_from_bytes, pdfinfo_from_path
from pdf2image.exceptions import (
    PDFInfoNotInstalledError,
    PDFPageCountError,
    PDFPopplerTimeoutError,
    PDFSyntaxError,
)

from pdf2pic.config import settings
from pdf2pic.exceptions import RasterizerError
from pdf2pic.rasterizer.image_utils import pil_format, resize_image, save_options, stream_path
from pdf2pic.schemas import ConversionOptions

logger = logging.getLogger(__name__)

POPPLER_ERRORS = (PDFInfoNotInstalledError, PDFPageCountError, PDFPopplerTimeoutError, PDFSyntaxError)
# Pillow reports unknown formats with KeyError/ValueError and encoder failures with OSError
PILLOW_ERRORS = (KeyError, ValueError, OSError)

PAGE_NUMBER_DIRECTIVE = "%p "


def expand_directive(directive: str, page: int, page_count: int) -> str:
    """Expands ``%p`` (page number), ``%n`` (page count) and ``%%`` in a directive."""
    return (
        directive.replace("%%", "\0")
        .replace("%p", str(page))
        .replace("%n", str(page_count))
        .replace("\0", "%")
    )


class Rasterizer:
    """Converts PDF pages using poppler and Pillow."""

    def __init__(
        self,
        density: int = 72,
        size: str = "768x512",
        quality: int = 0,
        compression: str = "jpeg",
        poppler_path: Optional[str] = None,
        timeout: Optional[int] = None,
    ):
        self.density = density
        self.size = size
        self.quality = quality
        self.compression = compression
        self.poppler_path = poppler_path if poppler_path is not None else settings.POPPLER_PATH
        self.timeout = timeout if timeout is not None else settings.PDF2IMAGE_TIMEOUT_SECONDS

    @classmethod
    def from_options(cls, options: ConversionOptions, **kwargs) -> "Rasterizer":
        """Builds a rasterizer using the rendering fields of the conversion options."""
        return cls(
            density=options.density,
            size=options.size,
            quality=options.quality,
            compression=options.compression,
            **kwargs,
        )

    def identify(self, pdf_path, directive: Optional[str] = None):
        """Queries document metadata through poppler's pdfinfo.

        Args:
            pdf_path: Path to the PDF.
            directive (str, optional): Per-page format string. When given, the
                result is the directive expanded once per page and concatenated,
                e.g. ``"1 2 3 "`` for ``"%p "`` on a three page document.

        Returns:
            dict or str: The pdfinfo fields, or the expanded directive.

        Raises:
            RasterizerError: If poppler is missing, times out or cannot read the file.
        """
        try:
            info = pdfinfo_from_path(
                os.fspath(pdf_path), poppler_path=self.poppler_path, timeout=self.timeout
            )
        except POPPLER_ERRORS as e:
            logger.error(f"pdfinfo failed for '{pdf_path}': {e}")
            raise RasterizerError(str(e)) from e

        if directive is None:
            return info

        page_count = int(info.get("Pages", 0))
        return "".join(expand_directive(directive, page, page_count) for page in range(1, page_count + 1))

    def render(self, stream, page_index: int) -> Image.Image:
        """Renders one zero-based page of the PDF stream and fits it to the configured size."""
        path = stream_path(stream)
        try:
            images = convert_from_bytes(
                stream.read(),
                dpi=self.density,
                first_page=page_index + 1,
                last_page=page_index + 1,
                poppler_path=self.poppler_path,
                timeout=self.timeout,
            )
        except POPPLER_ERRORS as e:
            logger.error(f"Rendering page index {page_index} of '{path}' failed: {e}")
            raise RasterizerError(str(e)) from e

        if not images:
            raise RasterizerError(f"No image produced for page index {page_index} of '{path}'")
        return resize_image(images[0], self.size)

    def _encode(self, image: Image.Image, target, image_format: str):
        format_name = pil_format(image_format)
        if format_name == "JPEG" and image.mode not in ("RGB", "L", "CMYK"):
            image = image.convert("RGB")
        try:
            image.save(target, format=format_name, **save_options(format_name, self.quality, self.compression))
        except PILLOW_ERRORS as e:
            logger.error(f"Encoding as '{image_format}' failed: {e}")
            raise RasterizerError(f"Cannot encode image as '{image_format}': {e}") from e

    def write(self, stream, page_index: int, output_path: str) -> str:
        """Renders one page and writes it to output_path, format taken from the extension."""
        image = self.render(stream, page_index)
        image_format = os.path.splitext(output_path)[1]
        self._encode(image, output_path, image_format)
        logger.debug(f"Wrote page index {page_index} to '{output_path}'")
        return output_path

    def to_base64(self, stream, page_index: int, image_format: str) -> str:
        """Renders one page and returns the encoded image as a base64 string."""
        image = self.render(stream, page_index)
        buf = io.BytesIO()
        self._encode(image, buf, image_format)
        return base64.b64encode(buf.getvalue()).decode("ascii")
