"""Exception hierarchy for xaml-path2shape.

All errors raised by the library derive from :class:`Path2ShapeError`, so
callers can catch a single type when they do not care about the cause.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any


class Path2ShapeError(Exception):
    """Base class for all xaml-path2shape errors.

    Args:
        message: Human readable description of the problem.
        details: Optional structured context (paths, setting names, ...).
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        return self.message


class ConfigError(Path2ShapeError):
    """Configuration file is missing, unparsable or holds invalid values."""


class MalformedInputError(Path2ShapeError):
    """Input document cannot be read, parsed, or lacks the path geometry."""

    def __init__(
        self,
        message: str,
        path: Path | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.path = path


class UnsafeInputError(MalformedInputError):
    """Input document uses XML features refused by the safe parser."""


class OutputError(Path2ShapeError):
    """Output directory or file could not be created or written."""

    def __init__(
        self,
        message: str,
        path: Path | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.path = path
