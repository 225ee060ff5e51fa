"""
Core Utilities

Modules:
    - exceptions: Custom exceptions
"""

from docgpt.core import exceptions

__all__ = ["exceptions"]
