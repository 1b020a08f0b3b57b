from .cache import SortConversionCache, default_cache
from .loader import SortConversionEntry, load_sort_conversion

__all__ = [
    "SortConversionCache",
    "SortConversionEntry",
    "default_cache",
    "load_sort_conversion",
]
