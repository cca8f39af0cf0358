"""
Leveled log router.

Routes formatted messages to stdout/stderr and a per-run log file, gated by a
severity bitmask.
"""

from .core.logging import (
    LogRouter,
    Severity,
    get_router,
    LEVEL_TRACE,
    LEVEL_INFO,
    LEVEL_WARNING,
    LEVEL_ERROR,
    LEVEL_ALL,
    LEVEL_NONE,
)
from .core.exceptions import (
    LogRouterError,
    DirectoryCreationError,
    FileCreationError,
    FileCloseError,
)

__all__ = [
    'LogRouter',
    'Severity',
    'get_router',
    'LEVEL_TRACE',
    'LEVEL_INFO',
    'LEVEL_WARNING',
    'LEVEL_ERROR',
    'LEVEL_ALL',
    'LEVEL_NONE',
    'LogRouterError',
    'DirectoryCreationError',
    'FileCreationError',
    'FileCloseError',
]
