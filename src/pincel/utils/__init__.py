"""Utility modules for Pincel.

Provides:
- text: escape_entities for code text
- logger: get_logger for logging
"""

from pincel.utils.logger import get_logger
from pincel.utils.text import escape_entities

__all__ = [
    "escape_entities",
    "get_logger",
]
