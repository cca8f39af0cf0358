"""
Leveled logging infrastructure.

Provides the LogRouter, its sinks and severity definitions, and a shared
default router instance.
"""

from .config import setup_logging, RouterFormatter, diagnostics_logger
from .severity import (
    Severity,
    parse_level_mask,
    LEVEL_NONE,
    LEVEL_TRACE,
    LEVEL_INFO,
    LEVEL_WARNING,
    LEVEL_ERROR,
    LEVEL_ALL,
)
from .sinks import Sink, DiscardSink, ConsoleSink, FileSink, TeeSink, SinkHandler
from .router import LogRouter, resolve_bindings, log_file_path

# Single shared router, created uninitialized on first use
_router_instance = None

def get_router() -> LogRouter:
    """Return the process-wide default router."""
    global _router_instance
    if _router_instance is None:
        _router_instance = LogRouter()
    return _router_instance


__all__ = [
    'LogRouter',
    'get_router',
    'resolve_bindings',
    'log_file_path',
    'Severity',
    'parse_level_mask',
    'LEVEL_NONE',
    'LEVEL_TRACE',
    'LEVEL_INFO',
    'LEVEL_WARNING',
    'LEVEL_ERROR',
    'LEVEL_ALL',
    'Sink',
    'DiscardSink',
    'ConsoleSink',
    'FileSink',
    'TeeSink',
    'SinkHandler',
    'RouterFormatter',
    'setup_logging',
    'diagnostics_logger',
]
