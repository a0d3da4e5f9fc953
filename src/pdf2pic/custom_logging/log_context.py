"""Custom logging context to tag log messages with the page being converted."""

import logging
from contextvars import ContextVar
from typing import Optional

from pdf2pic.config import settings

# Holds e.g. "report.pdf[3]" for the conversion running in the current task.
# asyncio copies the context into every task, so concurrent pages keep their own value.
conversion_target_context: ContextVar[Optional[str]] = ContextVar("conversion_target", default=None)


def format_target(pdf_name: str, page: Optional[int] = None) -> str:
    """Builds the tag stored in conversion_target_context."""
    if page is None:
        return pdf_name
    return f"{pdf_name}[{page}]"


class ContextFilter(logging.Filter):
    """Injects the conversion target into log records if present."""

    def filter(self, record):
        """Injects the conversion target into log records if present.

        Args:
            record (logging.LogRecord): The log record to modify.

        Returns:
            bool: Always returns True.
        """
        target = conversion_target_context.get()
        if target:
            record.msg = f"{target} {record.msg}"
        return True


LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: Optional[str] = None) -> logging.Handler:
    """Routes every log record to stderr, tagged with the conversion target.

    Call once at application startup; calling again replaces the handler
    instead of stacking a second one.

    Args:
        level (str, optional): Root logger level. Defaults to settings.LOG_LEVEL.

    Returns:
        logging.Handler: The installed handler.
    """
    root_logger = logging.getLogger()
    root_logger.handlers.clear()

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
    handler.addFilter(ContextFilter())

    root_logger.addHandler(handler)
    root_logger.setLevel((level or settings.LOG_LEVEL).upper())
    return handler
