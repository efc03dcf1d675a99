"""Utilities module for complex-code-spotter.

This module provides:
- Source text decoding and line slicing
- Console output for the command line
"""

from .console_logger import ConsoleLogger, console
from .text import (
    FALLBACK_ENCODINGS,
    count_lines,
    decode_source,
    normalize_newlines,
    slice_lines,
)

__all__ = [
    "ConsoleLogger",
    "console",
    "FALLBACK_ENCODINGS",
    "count_lines",
    "decode_source",
    "normalize_newlines",
    "slice_lines",
]
