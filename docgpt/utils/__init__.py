"""
Utility Functions and Classes

Provides centralized error handling.
"""

from docgpt.utils.error_handlers import (
    ErrorHandler,
    setup_error_handlers
)

__all__ = [
    "ErrorHandler",
    "setup_error_handlers"
]
