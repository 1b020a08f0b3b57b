from __future__ import annotations

from typing import Any, Dict, Optional


class DataUtilsError(Exception):
    """Base class for every error raised by datautils."""

    def __init__(self, message: str, *, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class InvalidPathError(DataUtilsError, ValueError):
    pass


class JSONParseError(DataUtilsError, ValueError):
    pass


class MissingParameterError(DataUtilsError, ValueError):
    pass


class UnknownEntityError(DataUtilsError, LookupError):
    pass


class SortConversionUnavailable(DataUtilsError, RuntimeError):
    """The sort conversion table could not be fetched."""
