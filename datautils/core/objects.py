"""
Keyed map helpers.

Inputs are plain dicts (and lists nested inside them). Paths are dot-delimited
strings; list items are addressed by their integer index ("items.0.id").
"""
from __future__ import annotations

import copy
import json
import math
import re
from datetime import date
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional
from urllib.parse import quote

from datautils.core import jsonutil
from datautils.errors import InvalidPathError

# characters left alone by encodeURIComponent
_URI_SAFE = "-_.!~*'()"

_MISSING = object()


def is_empty_object(obj: Any) -> bool:
    if obj is None:
        return True
    try:
        return len(obj) == 0
    except TypeError:
        return False


def is_valid_json(obj: Any) -> bool:
    """True if obj can be serialised to JSON."""
    try:
        json.dumps(obj)
    except (TypeError, ValueError):
        return False
    return True


def get_keys(obj: Mapping[str, Any]) -> List[str]:
    return list(obj.keys())


def apply_values(from_object: Mapping[str, Any], to_object: Dict[str, Any]) -> Dict[str, Any]:
    """Copy every key of from_object onto to_object (mutates and returns to_object)."""
    for key, value in from_object.items():
        to_object[key] = value
    return to_object


def has_child_object(obj: Mapping[str, Any]) -> bool:
    """True if any value is a nested mapping (lists do not count)."""
    return any(isinstance(v, Mapping) for v in obj.values())


def _as_index(segment: str) -> Optional[int]:
    # ASCII digits only
    body = segment[1:] if segment.startswith("-") else segment
    if not (body.isascii() and body.isdigit()):
        return None
    return int(segment)


def _step(current: Any, segment: str) -> Any:
    if isinstance(current, Mapping):
        if segment in current:
            return current[segment]
        index = _as_index(segment)
        if index is not None and index in current:
            return current[index]
        return _MISSING
    if isinstance(current, (list, tuple)):
        index = _as_index(segment)
        if index is not None and 0 <= index < len(current):
            return current[index]
        return _MISSING
    return _MISSING


def _resolve(obj: Any, path: str) -> Any:
    if not isinstance(path, str):
        raise InvalidPathError(
            f"path must be a dot-delimited string, got {type(path).__name__}",
            details={"path": path},
        )
    current = obj
    for segment in path.split("."):
        current = _step(current, segment)
        if current is _MISSING:
            return _MISSING
    return current


def get_value_at(obj: Any, path: str) -> Any:
    """
    Walk obj along a dot path ("a.b.c").

    Returns None as soon as a segment is missing. Raises InvalidPathError if
    path is not a string.
    """
    value = _resolve(obj, path)
    return None if value is _MISSING else value


def has_any(obj: Any, properties: Iterable[str]) -> bool:
    return any(_resolve(obj, p) is not _MISSING for p in properties)


def has_all(obj: Any, properties: Iterable[str]) -> bool:
    return all(_resolve(obj, p) is not _MISSING for p in properties)


def _is_leaf(value: Any) -> bool:
    return isinstance(value, date) or not isinstance(value, (Mapping, list))


def _omit_value(value: Any, keys: frozenset) -> Any:
    if _is_leaf(value):
        return value
    if isinstance(value, list):
        return [_omit_value(v, keys) for v in value]
    return {k: _omit_value(v, keys) for k, v in value.items() if k not in keys}


def _pick_value(value: Any, keys: frozenset) -> Any:
    if _is_leaf(value):
        return value
    if isinstance(value, list):
        return [_pick_value(v, keys) for v in value]
    return {k: _pick_value(v, keys) for k, v in value.items() if k in keys}


def omit_deep(obj: Any, keys: Iterable[str]) -> Any:
    """
    Remove keys at every level of nested dicts and lists.

    Dates and scalars are returned untouched, None becomes {}.
    """
    if obj is None:
        return {}
    return _omit_value(obj, frozenset(keys))


def pick_deep(obj: Any, keys: Iterable[str]) -> Any:
    """Keep only keys at every level of nested dicts and lists (see omit_deep)."""
    if obj is None:
        return {}
    return _pick_value(obj, frozenset(keys))


def _js_falsy(value: Any) -> bool:
    # containers are truthy here; empty ones are handled by remove_empty
    if value is None or value is False:
        return True
    if isinstance(value, str):
        return value == ""
    if isinstance(value, (int, float)):
        return value == 0 or (isinstance(value, float) and math.isnan(value))
    return False


def compact(obj: Mapping[str, Any], remove_falsy: bool = False, remove_empty: bool = False) -> Dict[str, Any]:
    """
    Shallow copy of obj without falsy values.

    0 and False are kept unless remove_falsy. Empty dicts/lists are removed
    only when remove_empty.
    """
    out: Dict[str, Any] = {}
    for key, value in obj.items():
        if _js_falsy(value) and (remove_falsy or not (value == 0 or value is False)):
            continue
        if remove_empty and isinstance(value, (Mapping, list)) and len(value) == 0:
            continue
        out[key] = value
    return out


def remove_null_attributes(obj: Dict[str, Any]) -> Dict[str, Any]:
    for key in [k for k, v in obj.items() if v is None]:
        del obj[key]
    return obj


def remove_property_where_regexp(obj: Any, prop: str, pattern: str) -> Any:
    """Delete obj[prop] when it is a string matching pattern."""
    if isinstance(obj, dict) and isinstance(obj.get(prop), str) and re.search(pattern, obj[prop]):
        del obj[prop]
    return obj


def _parse_index(key: Any) -> Optional[int]:
    if isinstance(key, bool):
        return None
    if isinstance(key, int):
        return key
    try:
        return int(str(key).strip())
    except ValueError:
        return None


def convert_keyed_object_to_array(keyed_object: Mapping[Any, Any]) -> List[Any]:
    """Values of the numeric keys, ordered by key ascending. Other keys are dropped."""
    indexed: Dict[int, Any] = {}
    for key in keyed_object.keys():
        idx = _parse_index(key)
        if idx is not None and idx not in indexed:
            indexed[idx] = key
    return [keyed_object[indexed[i]] for i in sorted(indexed)]


def map_property(obj: Mapping[str, Any], iterator: Callable[[str, Any, Dict[str, Any]], str]) -> Dict[str, Any]:
    """
    Rename keys to iterator(key, value, work_object).

    Works on a deep copy; the caller's object is never aliased.
    """
    work = copy.deepcopy(dict(obj))
    for key, value in list(work.items()):
        new_key = iterator(key, value, work)
        work[new_key] = value
        if key != new_key:
            del work[key]
    return work


def _js_string(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def to_query_string(obj: Mapping[str, Any]) -> str:
    """{"a": 1, "b": 2} -> "a=1&b=2" (percent-encoded)."""
    parts = [
        f"{quote(_js_string(k), safe=_URI_SAFE)}={quote(_js_string(v), safe=_URI_SAFE)}"
        for k, v in obj.items()
    ]
    return "&".join(parts)


def create_or_query(values: Any, key: str, parse_value: bool = False) -> Dict[str, List[Dict[str, Any]]]:
    if parse_value:
        values = jsonutil.parse_json(values)
    return {"or": [{key: v} for v in values]}


def sort_objects_by_key(items: List[Dict[str, Any]], key: str) -> List[Dict[str, Any]]:
    items.sort(key=lambda o: o[key])
    return items


def sort_objects_reverse_by_key(items: List[Dict[str, Any]], key: str) -> List[Dict[str, Any]]:
    items.sort(key=lambda o: o[key], reverse=True)
    return items


def _diff(a: Any, b: Any, prefix: str, changes: Dict[str, List[str]]) -> None:
    if isinstance(a, Mapping) and isinstance(b, Mapping):
        a_keys = set(a.keys())
        b_keys = set(b.keys())
        for k in sorted(b_keys - a_keys, key=str):
            changes["added"].append(f"{prefix}{k}")
        for k in sorted(a_keys - b_keys, key=str):
            changes["removed"].append(f"{prefix}{k}")
        for k in sorted(a_keys & b_keys, key=str):
            _diff(a[k], b[k], f"{prefix}{k}.", changes)
        return

    if isinstance(a, list) and isinstance(b, list):
        for i in range(min(len(a), len(b))):
            _diff(a[i], b[i], f"{prefix}{i}.", changes)
        for i in range(len(a), len(b)):
            changes["added"].append(f"{prefix}{i}")
        for i in range(len(b), len(a)):
            changes["removed"].append(f"{prefix}{i}")
        return

    if a != b:
        changes["modified"].append(prefix.rstrip(".") or "$")


def deep_diff(obj: Any, compare: Any) -> Optional[Dict[str, List[str]]]:
    """
    Paths that differ between obj and compare.

    Returns {"added": [...], "removed": [...], "modified": [...]} or None when
    the two values are equal. "$" names the root.
    """
    changes: Dict[str, List[str]] = {"added": [], "removed": [], "modified": []}
    _diff(obj, compare, "", changes)
    if not any(changes.values()):
        return None
    return changes
