from . import arrays, dates, fn, geo, jsonutil, numeric, objects, postcode, strings, timing, values
from .values import has_value

__all__ = [
    "arrays",
    "dates",
    "fn",
    "geo",
    "jsonutil",
    "numeric",
    "objects",
    "postcode",
    "strings",
    "timing",
    "values",
    "has_value",
]
