"""
Centralized logging configuration for the PDF Services samples.
Initializes loguru and intercepts standard library logging.

Nothing is configured at import time: programs call setup_logging() with the
sink they want, and library code logs through the loguru logger it is given.
"""

import logging
import sys
from typing import Any

from loguru import logger

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)


class InterceptHandler(logging.Handler):
    """
    Default handler from documents for intercepting standard library logging messages.
    See: https://loguru.readthedocs.io/en/stable/overview.html#entirely-compatible-with-standard-logging
    """

    def emit(self, record):
        # Get corresponding Loguru level if it exists
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Find caller from where originated the logged message
        frame, depth = logging.currentframe(), 2
        while frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def setup_logging(sink: Any = sys.stdout, level: str = "INFO", colorize: bool | None = None) -> int:
    """
    Configures loguru to send all logs to ``sink``.

    Args:
        sink: Any loguru sink (stream, path, callable).
        level: Minimum level to emit.
        colorize: Force colors on/off; loguru decides when None.

    Returns:
        The loguru handler id, for callers that want to remove it later.
    """
    # Remove all existing handlers
    logger.remove()

    handler_id = logger.add(
        sink,
        format=LOG_FORMAT,
        level=level,
        colorize=colorize,
    )

    # Intercept standard library logging
    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)

    # httpx/httpcore log every request at INFO
    for name in ["httpx", "httpcore"]:
        _logger = logging.getLogger(name)
        _logger.handlers = [InterceptHandler()]
        _logger.setLevel(logging.WARNING)
        _logger.propagate = False

    logger.debug("Logging initialized with Loguru.")
    return handler_id
