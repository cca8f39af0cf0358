"""
Error Types

Each setup/teardown failure of the router maps to one ErrorType carrying a
stable machine code and a message template.
"""

from enum import Enum
from typing import Dict, Any


class ErrorType(Enum):
    """Enumeration of error kinds surfaced by initialize/stop."""

    DIRECTORY_CREATION = ("directory_creation_error", "Failed to create log directory '{path}': {error_details}")
    FILE_CREATION = ("file_creation_error", "Failed to create log file '{path}': {error_details}")
    FILE_CLOSE = ("file_close_error", "Failed to close log file '{path}': {error_details}")

    def __init__(self, code: str, message_template: str):
        self.code = code
        self.message_template = message_template

    def format_message(self, **kwargs) -> str:
        """Format the error message with provided parameters."""
        try:
            return self.message_template.format(**kwargs)
        except KeyError:
            return self.message_template

    def create_error_detail(self, **kwargs) -> Dict[str, Any]:
        """Create standardized error detail dictionary."""
        return {
            "error": {
                "message": self.format_message(**kwargs),
                "code": self.code
            }
        }
