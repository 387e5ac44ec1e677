"""
Logging helpers that scrub explicitly, on top of the interceptor.

The interceptor already redacts every record and every stream write; these
helpers are the second layer, for handlers whose stream was captured before
interception or for processes that never import the bootstrap.
"""

import logging
import sys
from typing import Optional, TextIO

from .interceptor import redact_log_record
from .pipeline import RedactionPipeline, get_default_pipeline

LOG_FORMAT = "[%(asctime)s] [%(levelname)s] %(message)s"

# ANSI color codes
COLORS = {
    "red": "\x1b[31m",
    "yellow": "\x1b[33m",
    "cyan": "\x1b[36m",
    "gray": "\x1b[90m",
    "reset": "\x1b[0m",
}

LEVEL_COLORS = {
    logging.CRITICAL: COLORS["red"],
    logging.ERROR: COLORS["red"],
    logging.WARNING: COLORS["yellow"],
    logging.INFO: COLORS["cyan"],
    logging.DEBUG: COLORS["gray"],
}


class RedactingFormatter(logging.Formatter):
    """
    Formatter that scrubs the finished line, traceback included.

    Example:
        handler.setFormatter(RedactingFormatter(LOG_FORMAT))
        logger.error("Failed: API_KEY=secret123")
        # [2026-01-01 10:00:00,000] [ERROR] Failed: API_KEY=[REDACTED]
    """

    def __init__(self, fmt: Optional[str] = None, datefmt: Optional[str] = None,
                 pipeline: Optional[RedactionPipeline] = None, color: bool = False):
        super().__init__(fmt, datefmt)
        self._pipeline = pipeline
        self.color = color

    @property
    def pipeline(self) -> RedactionPipeline:
        return self._pipeline or get_default_pipeline()

    def format(self, record: logging.LogRecord) -> str:
        line = self.pipeline.scrub_text(super().format(record))
        if self.color:
            color = LEVEL_COLORS.get(record.levelno, "")
            line = line.replace(f"[{record.levelname}]", f"{color}[{record.levelname}]{COLORS['reset']}", 1)
        return line


class RedactingFilter(logging.Filter):
    """
    Redacts a record's msg and args in place. Never drops a record.
    """

    def __init__(self, pipeline: Optional[RedactionPipeline] = None):
        super().__init__()
        self._pipeline = pipeline

    @property
    def pipeline(self) -> RedactionPipeline:
        return self._pipeline or get_default_pipeline()

    def filter(self, record: logging.LogRecord) -> bool:
        redact_log_record(record, self.pipeline)
        return True


def configure_logging(verbose: bool = False, stream: Optional[TextIO] = None) -> logging.Handler:
    """
    Attach a single redacting StreamHandler to the root logger.

    Args:
        verbose: DEBUG level when True, INFO otherwise.
        stream: Defaults to sys.stderr as it is at call time (the intercepted
                stream once the bootstrap has run).

    Returns:
        The installed handler. Handlers added by an earlier call are replaced.
    """
    stream = stream if stream is not None else sys.stderr
    isatty = getattr(stream, "isatty", None)
    color = bool(isatty and isatty())

    handler = logging.StreamHandler(stream)
    handler.setFormatter(RedactingFormatter(LOG_FORMAT, color=color))
    handler.addFilter(RedactingFilter())
    handler._redacting_handler = True

    root = logging.getLogger()
    for existing in list(root.handlers):
        if getattr(existing, "_redacting_handler", False):
            root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(logging.DEBUG if verbose else logging.INFO)
    return handler
