"""
Error Handling Module

Standardized error kinds for the log router's setup and teardown calls.

Components:
- ErrorType: Enumeration of error kinds with code and message template
"""

from .error_types import ErrorType

__all__ = [
    'ErrorType',
]
