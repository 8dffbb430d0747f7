"""Structured parsing errors for the scraping pipeline."""

from __future__ import annotations
from typing import Any


class ParseError(Exception):
    """Base class for parsing related issues."""

    def __init__(self, message: str, *, context: dict[str, Any] | None = None):
        super().__init__(message)
        self.context = context or {}


class MissingSectionError(ParseError):
    """Raised when the expected table / headline markers are absent."""


class EmptyTableError(ParseError):
    """Raised when a table was located but yielded no usable rows."""
