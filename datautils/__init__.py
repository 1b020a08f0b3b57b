"""
datautils: data helpers shared by the service desk backend.

Submodules:
    core.values, core.arrays, core.objects   presence, sequence and map helpers
    core.strings, core.numeric, core.dates   formatting and parsing helpers
    model                                    association population policy
    sorting                                  sort conversion table
"""
from .config import configure_logging, get_settings
from .errors import (
    DataUtilsError,
    InvalidPathError,
    JSONParseError,
    MissingParameterError,
    SortConversionUnavailable,
    UnknownEntityError,
)

__version__ = "1.0.0"

__all__ = [
    "DataUtilsError",
    "InvalidPathError",
    "JSONParseError",
    "MissingParameterError",
    "SortConversionUnavailable",
    "UnknownEntityError",
    "configure_logging",
    "get_settings",
]
