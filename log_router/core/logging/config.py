"""
Formatting and diagnostics configuration for the log router.

RouterFormatter produces the routed line layout:

    TRACE: 2024/01/23 01:23:23 worker.py:42: message

The package also reports its own lifecycle events (initialize, stop,
failures) on the "log-router" logger, silent unless setup_logging() is
called.
"""

import logging
import os
import sys

DIAGNOSTICS_LOGGER_NAME = "log-router"
ROUTER_DATE_FORMAT = "%Y/%m/%d %H:%M:%S"

diagnostics_logger = logging.getLogger(DIAGNOSTICS_LOGGER_NAME)
diagnostics_logger.addHandler(logging.NullHandler())


class RouterFormatter(logging.Formatter):
    """
    Formatter for routed lines: severity prefix, date and time, and
    optionally the caller's short file name and line.

    A single trailing newline in the message is dropped so every line ends
    with exactly one newline once the sink appends its terminator.
    """

    def __init__(self, prefix: str, show_caller: bool = True):
        fmt = "%(asctime)s %(filename)s:%(lineno)d: %(message)s" if show_caller else "%(asctime)s %(message)s"
        super().__init__(prefix + fmt, datefmt=ROUTER_DATE_FORMAT)
        self.prefix = prefix
        self.show_caller = show_caller

    def format(self, record):
        formatted = super().format(record)
        if formatted.endswith("\n"):
            formatted = formatted[:-1]
        return formatted


def setup_logging(level=None):
    """
    Attach a console handler to the diagnostics logger.

    Args:
        level: logging level name or number; defaults to LOG_LEVEL env var or INFO

    Returns:
        logging.Logger: the configured diagnostics logger
    """
    if level is None:
        level = os.environ.get("LOG_LEVEL", "INFO")
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    diagnostics_logger.setLevel(level)

    # Очищаем существующие обработчики
    diagnostics_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S%z"
    ))
    console_handler.setLevel(level)
    diagnostics_logger.addHandler(console_handler)

    return diagnostics_logger
