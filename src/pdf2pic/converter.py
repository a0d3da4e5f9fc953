"""Orchestrates PDF page conversion: validation, page discovery and per-page dispatch.

Classes:
    PDF2Pic: Converts one page or many pages of a PDF to image files or base64 strings.

All conversion methods are coroutines. Rendering runs in worker threads so a
bulk call keeps every page in flight at once, optionally bounded by
``max_concurrency``.
"""

import asyncio
import logging
import os
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union

from pdf2pic.config import settings
from pdf2pic.custom_logging.log_context import conversion_target_context, format_target
from pdf2pic.exceptions import PageOutOfRangeError, RasterizerError
from pdf2pic.rasterizer.image_converter import PAGE_NUMBER_DIRECTIVE, Rasterizer
from pdf2pic.schemas import Base64Result, ConversionOptions, ConversionResult
from pdf2pic.validation import file_exists, is_valid_pdf

logger = logging.getLogger(__name__)

ALL_PAGES = -1

PageSelection = Union[int, Sequence[int]]


class PDF2Pic:
    """Converts PDF pages to images with options fixed at construction."""

    def __init__(
        self,
        options: Optional[Union[ConversionOptions, Dict[str, Any]]] = None,
        rasterizer: Optional[Rasterizer] = None,
        max_concurrency: Optional[int] = None,
    ):
        """Initializes the converter.

        Args:
            options: A ConversionOptions, or a dict of overrides merged with the defaults.
            rasterizer: The rendering backend. Built from the options when omitted.
            max_concurrency: Upper bound on pages rendered at once by the bulk methods.
                None falls back to settings.MAX_CONCURRENT_CONVERSIONS; 0 means unbounded.
        """
        if isinstance(options, ConversionOptions):
            self.options = options
        else:
            self.options = ConversionOptions(**(options or {}))
        self.rasterizer = rasterizer or Rasterizer.from_options(self.options)
        if max_concurrency is None:
            max_concurrency = settings.MAX_CONCURRENT_CONVERSIONS
        self.max_concurrency = max_concurrency or None

    # -- validation --

    @staticmethod
    def _validate(pdf_path) -> None:
        is_valid_pdf(pdf_path)
        file_exists(pdf_path)

    # -- page discovery --

    async def identify(self, pdf_path) -> Dict[str, Any]:
        """Returns the document metadata reported by poppler (Pages, Page size, Producer...)."""
        self._validate(pdf_path)
        return await asyncio.to_thread(self.rasterizer.identify, pdf_path)

    async def get_pages(self, pdf_path) -> List[int]:
        """Lists the page numbers of the document, starting at 1.

        The rasterizer emits one ``%p`` token per page. Splitting on any run of
        whitespace never yields an empty trailing token, so the list length is
        the page count.
        """
        tokens = await asyncio.to_thread(self.rasterizer.identify, pdf_path, PAGE_NUMBER_DIRECTIVE)
        try:
            return [int(token) for token in tokens.split()]
        except ValueError as e:
            raise RasterizerError(f"Unexpected page listing for '{pdf_path}': {tokens!r}") from e

    async def get_page_count(self, pdf_path) -> int:
        """Returns how many pages the document has."""
        return len(await self.get_pages(pdf_path))

    async def _check_page(self, pdf_path, page: int) -> None:
        page_count = await self.get_page_count(pdf_path)
        if page < 1 or page > page_count:
            logger.error(f"Page {page} requested but '{pdf_path}' has {page_count} page(s)")
            raise PageOutOfRangeError(f"Cannot convert non-existent page {page} of {page_count}")

    # -- output naming --

    def _resolve_output_path(self, pdf_path, page: int) -> Path:
        """Builds ``{save_directory}/{save_name}_{page}.{format}``, creating the directory."""
        stem = Path(os.fspath(pdf_path)).stem
        save_directory = Path(self.options.save_directory or stem)
        save_name = self.options.save_name or stem
        # exist_ok: concurrent pages may race to create the same directory
        save_directory.mkdir(parents=True, exist_ok=True)
        return save_directory / f"{save_name}_{page}.{self.options.format}"

    # -- single page --

    def _write_page(self, pdf_path, page: int, output_path: Path) -> ConversionResult:
        with open(pdf_path, "rb") as stream:
            self.rasterizer.write(stream, page - 1, str(output_path))
        return ConversionResult(
            name=output_path.name,
            size=output_path.stat().st_size / 1000.0,
            path=str(output_path),
            page=page,
        )

    def _encode_page(self, pdf_path, page: int) -> Base64Result:
        with open(pdf_path, "rb") as stream:
            encoded = self.rasterizer.to_base64(stream, page - 1, self.options.format)
        return Base64Result(base64=encoded, page=page)

    async def convert(self, pdf_path, page: int = 1) -> ConversionResult:
        """Converts one page (1-based) to an image file.

        Raises:
            InvalidPDFError: If the path does not end in ``.pdf``.
            PDFFileNotFoundError: If the file does not exist.
            PageOutOfRangeError: If the page is not in the document.
            RasterizerError: If rendering or encoding fails.
        """
        self._validate(pdf_path)
        token = conversion_target_context.set(format_target(os.path.basename(pdf_path), page))
        try:
            output_path = self._resolve_output_path(pdf_path, page)
            await self._check_page(pdf_path, page)
            logger.info(f"Converting page {page} to '{output_path}'")
            result = await asyncio.to_thread(self._write_page, pdf_path, page, output_path)
            logger.info(f"Wrote {result.name} ({result.size} KB)")
            return result
        finally:
            conversion_target_context.reset(token)

    async def to_base64(self, pdf_path, page: int = 1) -> Base64Result:
        """Converts one page (1-based) to a base64 encoded image, nothing is written to disk."""
        self._validate(pdf_path)
        token = conversion_target_context.set(format_target(os.path.basename(pdf_path), page))
        try:
            await self._check_page(pdf_path, page)
            logger.info(f"Encoding page {page} as {self.options.format}")
            return await asyncio.to_thread(self._encode_page, pdf_path, page)
        finally:
            conversion_target_context.reset(token)

    # -- bulk --

    async def _resolve_pages(self, pdf_path, pages: PageSelection) -> List[int]:
        if isinstance(pages, int) and not isinstance(pages, bool):
            if pages != ALL_PAGES:
                raise TypeError(f"pages must be {ALL_PAGES} or a sequence of page numbers, got {pages}")
            return await self.get_pages(pdf_path)
        if isinstance(pages, (str, bytes)) or not isinstance(pages, Sequence):
            raise TypeError(f"pages must be {ALL_PAGES} or a sequence of page numbers, got {pages!r}")
        return list(pages)

    @asynccontextmanager
    async def _slot(self, semaphore: Optional[asyncio.Semaphore]):
        if semaphore is None:
            yield
            return
        async with semaphore:
            yield

    async def _run_bulk(self, pdf_path, pages: PageSelection, convert_page) -> list:
        # Checked up front so an empty page list still rejects a bad path
        self._validate(pdf_path)
        page_list = await self._resolve_pages(pdf_path, pages)
        semaphore = asyncio.Semaphore(self.max_concurrency) if self.max_concurrency else None

        async def run(page):
            async with self._slot(semaphore):
                return await convert_page(pdf_path, page)

        logger.info(f"Converting {len(page_list)} page(s) of '{pdf_path}'")
        # gather keeps input order; the first failure propagates and sibling results are dropped
        return list(await asyncio.gather(*(run(page) for page in page_list)))

    async def convert_bulk(self, pdf_path, pages: PageSelection = ALL_PAGES) -> List[ConversionResult]:
        """Converts several pages to image files.

        Args:
            pdf_path: Path to the PDF.
            pages: ``-1`` for every page, or a sequence of 1-based page numbers.
                Results come back in the same order as the sequence.

        Raises:
            TypeError: If pages is neither -1 nor a sequence.
        """
        return await self._run_bulk(pdf_path, pages, self.convert)

    async def convert_to_base64_bulk(self, pdf_path, pages: PageSelection = ALL_PAGES) -> List[Base64Result]:
        """Converts several pages to base64 strings, same page rules as convert_bulk."""
        return await self._run_bulk(pdf_path, pages, self.to_base64)
