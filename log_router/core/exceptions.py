from pathlib import Path
from typing import Optional, Union

from .error_handling import ErrorType
from .logging.config import diagnostics_logger


class LogRouterError(Exception):
    """Base class for failures surfaced by LogRouter.initialize/stop."""

    error_type: ErrorType = None

    def __init__(self, path: Union[str, Path], original_exception: Optional[Exception] = None):
        self.path = str(path)
        self.original_exception = original_exception
        error_details = str(original_exception) if original_exception else "unknown error"
        self.message = self.error_type.format_message(path=self.path, error_details=error_details)
        super().__init__(self.message)

        # Log the exception when it's created
        diagnostics_logger.error(self.message, extra={
            "router": {
                "error_code": self.error_type.code,
                "path": self.path,
                "original_exception_type": type(original_exception).__name__ if original_exception else None
            }
        })

    @property
    def code(self) -> str:
        return self.error_type.code

    def to_detail(self):
        return self.error_type.create_error_detail(path=self.path, error_details=str(self.original_exception))


class DirectoryCreationError(LogRouterError):
    """The dated log directory could not be created."""
    error_type = ErrorType.DIRECTORY_CREATION


class FileCreationError(LogRouterError):
    """The per-run log file could not be created (permission denied, disk full...)."""
    error_type = ErrorType.FILE_CREATION


class FileCloseError(LogRouterError):
    """Closing the owned log file failed."""
    error_type = ErrorType.FILE_CLOSE
