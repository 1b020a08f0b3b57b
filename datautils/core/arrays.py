"""
Sequence helpers.

Unless stated otherwise helpers return new lists and never mutate the list
they are given. Elements are usually dicts; paths are dot-delimited strings
resolved with objects.get_value_at.
"""
from __future__ import annotations

import functools
from enum import Enum
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, Union

from datautils.core import objects
from datautils.core.values import has_value

PathOrPaths = Union[str, Sequence[str]]

_ABSENT = object()


class Decision(str, Enum):
    INCLUDE = "INCLUDE"
    EXCLUDE = "EXCLUDE"
    DEFAULT = "DEFAULT"


def deep_equal(a: Any, b: Any) -> bool:
    """Structural equality that does not treat True/1 or False/0 as equal."""
    if isinstance(a, bool) or isinstance(b, bool):
        return type(a) is type(b) and a == b
    if isinstance(a, dict) and isinstance(b, dict):
        if a.keys() != b.keys():
            return False
        return all(deep_equal(a[k], b[k]) for k in a)
    if isinstance(a, (list, tuple)) and isinstance(b, (list, tuple)):
        if len(a) != len(b):
            return False
        return all(deep_equal(x, y) for x, y in zip(a, b))
    return a == b


def _identity_key(value: Any) -> Any:
    # lists and tuples compare equal (as in deep_equal); bools never equal ints
    if isinstance(value, bool):
        return (bool, value)
    if isinstance(value, (list, tuple)):
        return (list, tuple(_identity_key(v) for v in value))
    if isinstance(value, dict):
        return (dict, frozenset((k, _identity_key(v)) for k, v in value.items()))
    return (None, value)


def unique(seq: Iterable[Any]) -> List[Any]:
    """Drop duplicates (by deep_equal), keeping the first occurrence."""
    out: List[Any] = []
    seen = set()
    unhashable: List[Any] = []
    for value in seq:
        try:
            key = _identity_key(value)
            hash(key)
        except TypeError:
            if any(deep_equal(value, o) for o in out):
                continue
            unhashable.append(value)
        else:
            if key in seen or any(deep_equal(value, u) for u in unhashable):
                continue
            seen.add(key)
        out.append(value)
    return out


def first(seq: Sequence[Any], length: Optional[int] = None) -> Any:
    if length is None:
        return seq[0] if seq else None
    return list(seq[:length])


def strip_unwanted_object_fields(
    seq: List[Dict[str, Any]],
    fields: Iterable[str],
    association: Optional[str] = None,
    association_fields: Iterable[str] = (),
) -> List[Dict[str, Any]]:
    """Delete fields from each item, and association_fields from item[association]. Mutates seq."""
    fields = list(fields)
    association_fields = list(association_fields)
    for item in seq:
        for f in fields:
            item.pop(f, None)
        if association and association_fields:
            nested = item.get(association)
            if isinstance(nested, dict):
                for f in association_fields:
                    nested.pop(f, None)
    return seq


def _binary_compare(association: Optional[str], key: str, a: Any, b: Any) -> int:
    if association and key:
        return 1 if a[association][key] > b[association][key] else -1
    return 1 if a[key] > b[key] else -1


def sort_by_field(seq: List[Any], association: Optional[str], key: str) -> List[Any]:
    """
    Sort seq in place, ascending by item[key] or item[association][key].

    The comparator never reports equality, so the order of items with equal
    keys is unspecified.
    """
    seq.sort(key=functools.cmp_to_key(functools.partial(_binary_compare, association, key)))
    return seq


def get_first_existing_record(seq: Iterable[Any], obj: Any, prop: Optional[str] = None) -> Any:
    for item in seq:
        x = item.get(prop) if prop else item
        y = obj.get(prop) if prop else obj
        if deep_equal(x, y):
            return item
    return None


def compact_map(seq: Optional[Sequence[Any]], map_fn: Callable[[Any, int, Sequence[Any]], Any]) -> List[Any]:
    """Map with map_fn(value, index, seq), dropping results without a value."""
    if not seq:
        return []
    out: List[Any] = []
    for index, value in enumerate(seq):
        result = map_fn(value, index, seq)
        if has_value(result):
            out.append(result)
    return out


def compact_pluck(seq: Iterable[Any], property_names: PathOrPaths, include_falsy: bool = True) -> List[Any]:
    """
    Values of the named keys, for the items that actually have them.

    With include_falsy=False, falsy values are dropped as well.
    """
    names = to_array(property_names)
    out: List[Any] = []
    for item in seq:
        for name in names:
            if not isinstance(item, dict) or name not in item:
                continue
            current = item[name]
            if include_falsy is False and not current:
                continue
            out.append(current)
    return out


def contains_all(array1: Sequence[Any], array2: Iterable[Any]) -> bool:
    return all(v in array1 for v in array2)


def contains_any(array1: Sequence[Any], array2: Iterable[Any]) -> bool:
    return any(v in array1 for v in array2)


def deep_contains(seq: Optional[Iterable[Any]], value: Any) -> bool:
    return any(deep_equal(item, value) for item in (seq or []))


def to_object(seq: Sequence[Any]) -> Dict[str, Any]:
    """["a", "b"] -> {"0": "a", "1": "b"}"""
    return {str(i): v for i, v in enumerate(seq)}


def merge(*sequences: Any) -> List[Any]:
    """
    Index-wise merge; for each index the last sequence that has it wins.

    Arguments that are not lists are ignored.
    """
    keyed = compact_map(list(sequences), lambda value, *_: to_object(value) if isinstance(value, list) else None)
    merged: Dict[str, Any] = {}
    for part in keyed:
        merged.update(part)
    return objects.convert_keyed_object_to_array(merged)


def allow_decision(include_list: Optional[Sequence[Any]], exclude_list: Optional[Sequence[Any]], value: Any) -> Decision:
    include_empty = not include_list
    exclude_empty = not exclude_list
    in_include = deep_contains(include_list, value)
    in_exclude = deep_contains(exclude_list, value)

    if include_empty and exclude_empty:
        return Decision.DEFAULT

    if not include_empty and not exclude_empty:
        # in both or in neither
        if in_include == in_exclude:
            return Decision.DEFAULT
        return Decision.INCLUDE if in_include else Decision.EXCLUDE

    if not include_empty:
        return Decision.INCLUDE if in_include else Decision.EXCLUDE

    return Decision.EXCLUDE if in_exclude else Decision.INCLUDE


def allow(
    include_list: Optional[Sequence[Any]],
    exclude_list: Optional[Sequence[Any]],
    value: Any,
    neither_or_both: bool = True,
) -> bool:
    """
    Is value allowed by an include list and an exclude list.

    Only an include list: membership. Only an exclude list: non-membership.
    Both lists: the list the value is in wins; if it is in both or neither,
    neither_or_both is returned. No lists: neither_or_both.
    """
    neither_or_both = neither_or_both is not False
    decision = allow_decision(include_list, exclude_list, value)
    if decision is Decision.DEFAULT:
        return neither_or_both
    return decision is Decision.INCLUDE


def sum_by(seq: Sequence[Any], iteratee: Union[None, str, Callable[[Any], Any]] = None) -> Any:
    if callable(iteratee):
        values = [iteratee(v) for v in seq]
    elif isinstance(iteratee, str):
        values = [v.get(iteratee) for v in seq]
    else:
        values = list(seq)
    return sum(v for v in values if v is not None)


def to_array(value: Any) -> List[Any]:
    """list -> as is, tuple/set -> list, present scalar -> [value], absent -> []."""
    if isinstance(value, list):
        return value
    if isinstance(value, (tuple, set, frozenset)):
        return list(value)
    if has_value(value):
        return [value]
    return []


def reduce(seq: Iterable[Any], fn: Callable[[Any, Any], Any], accumulator: Any) -> Any:
    return functools.reduce(fn, seq, accumulator)


def pluck_deep(seq: Iterable[Any], path: str) -> List[Any]:
    return [objects.get_value_at(item, path) for item in seq]


def _group_key_part(value: Any) -> str:
    if value is _ABSENT:
        return "undefined"
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def group_by(seq: Iterable[Dict[str, Any]], grouping_attributes: Sequence[str]) -> List[List[Dict[str, Any]]]:
    """
    Bucket items by the "_" joined values of grouping_attributes.

    A missing attribute and a None value land in different buckets. Returns
    the buckets as a list, in the order each key was first seen.
    """
    groups: Dict[str, List[Dict[str, Any]]] = {}
    for item in seq:
        key = "".join("_" + _group_key_part(item.get(attr, _ABSENT)) for attr in grouping_attributes)
        groups.setdefault(key, []).append(item)
    return list(groups.values())


def multi_pluck(seq: Sequence[Any], paths: PathOrPaths) -> List[Any]:
    result: List[Any] = []
    for path in to_array(paths):
        result.extend(pluck_deep(seq, path))
    return result


def uniq_pluck(seq: Sequence[Any], paths: PathOrPaths) -> List[Any]:
    return unique(multi_pluck(seq, paths))


def unique_by(seq: Iterable[Any], path: str) -> List[Any]:
    """First item per distinct value at path; items without a value there are dropped."""
    found: List[Any] = []
    out: List[Any] = []
    for item in seq:
        value = objects.get_value_at(item, path)
        if not has_value(value) or any(deep_equal(value, f) for f in found):
            continue
        found.append(value)
        out.append(item)
    return out
