from __future__ import annotations

import re
from typing import Any, Dict, Optional

from datautils.core.arrays import compact_map
from datautils.core.dates import format_sybase_datetime
from datautils.model.schema import Association, AssociationKind, EntitySchema

_LEADING_INT = re.compile(r"^\s*[+-]?\d")


def format_migration_boolean(value: Any) -> bool:
    """1 / "1" / True / "true" -> True, anything else False."""
    if isinstance(value, bool):
        return value
    return value in ("1", 1, "true")


def format_migration_date(value: Any) -> Optional[str]:
    if not value:
        return None
    return format_sybase_datetime(value)


def format_migration_data(value: Any, field_type: Optional[str]) -> Any:
    if field_type == "datetime":
        return format_migration_date(value)
    if field_type == "boolean":
        return format_migration_boolean(value)
    return value


def clean_input_data(schema: EntitySchema, data: Dict[str, Any], migrating: bool = False) -> Dict[str, Any]:
    """
    Drop keys of data that are not attributes of schema (mutates data).

    With migrating=True, legacy datetime and boolean values are normalised
    according to the declared field type.
    """
    attributes = schema.attribute_names
    for key in list(data.keys()):
        if key not in attributes:
            del data[key]
        elif migrating:
            data[key] = format_migration_data(data[key], schema.field_types.get(key))
    return data


def _is_id_like(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, (int, float)):
        return True
    return isinstance(value, str) and bool(_LEADING_INT.match(value))


def _replace_with_ids(data: Dict[str, Any], association: Association) -> None:
    value = data[association.alias]

    if _is_id_like(value):
        return

    if isinstance(value, list):
        def to_id(item: Any, *_: Any) -> Any:
            if isinstance(item, (int, float)) and not isinstance(item, bool):
                return item
            if not item:
                return None
            return item.get("id") if isinstance(item, dict) else None

        data[association.alias] = compact_map(value, to_id)
    elif isinstance(value, dict) and isinstance(value.get("id"), (int, float)) and not isinstance(value.get("id"), bool):
        data[association.alias] = value["id"]
    else:
        del data[association.alias]


def remove_associations_from_data(schema: EntitySchema, data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Copy of data where association values are reduced to ids: nested records
    become their id, lists become lists of ids. Values that cannot be reduced
    are removed.
    """
    out = dict(data)
    for association in schema.associations:
        if association.alias in out:
            _replace_with_ids(out, association)
    return out


def remove_collections_from_data(schema: EntitySchema, data: Dict[str, Any]) -> Dict[str, Any]:
    out = dict(data)
    for association in schema.associations:
        if association.kind == AssociationKind.COLLECTION:
            out.pop(association.alias, None)
    return out
