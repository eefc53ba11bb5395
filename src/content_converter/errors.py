"""Typed exception hierarchy for HTML-to-markdown conversion errors.

Conversion treats unexpected markup as an expected input class, so the only
failure the pipeline surfaces is a ParseError for input that cannot be
decoded or parsed at all.
"""

from typing import Optional


class ConverterError(Exception):
    """Base exception for all content conversion errors."""
    pass


class ParseError(ConverterError):
    """Raised when input HTML cannot be decoded or parsed."""

    def __init__(self, reason: str, offset: Optional[int] = None):
        if offset is not None:
            message = f"Failed to parse HTML at byte offset {offset}: {reason}"
        else:
            message = f"Failed to parse HTML: {reason}"
        super().__init__(message)
        self.reason = reason
        self.offset = offset
