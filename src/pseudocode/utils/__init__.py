"""Utility modules for pseudocode.

Provides:
- text: escape_html, snake_case for text processing
- logger: get_logger for logging
"""

from pseudocode.utils.logger import get_logger
from pseudocode.utils.text import escape_html, snake_case

__all__ = [
    "escape_html",
    "get_logger",
    "snake_case",
]
