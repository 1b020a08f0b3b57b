from __future__ import annotations

import math
from datetime import date
from typing import Any, Mapping


def has_value(value: Any) -> bool:
    """
    Presence predicate shared by every other helper.

    - None, empty str/list/tuple/set/dict and NaN -> False
    - 0 and False -> True
    - dates -> True (datetime instances cannot be invalid)
    - anything else -> truthiness
    """
    if value is None:
        return False
    if isinstance(value, bool):
        return True
    if isinstance(value, (int, float)):
        if isinstance(value, float) and math.isnan(value):
            return False
        return True
    if isinstance(value, date):
        return True
    if isinstance(value, (str, bytes, list, tuple, set, frozenset, Mapping)):
        return len(value) > 0
    return bool(value)
