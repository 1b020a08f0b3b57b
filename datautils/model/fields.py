from __future__ import annotations

from typing import Any, List, Optional

from datautils.core.arrays import compact_map, to_array, unique
from datautils.model.population import AliasList, PopulateSpec, get_attributes_to_populate
from datautils.model.schema import EntitySchema, normalise_model_name


def get_property_on_model(schema: EntitySchema, prop: str) -> Optional[str]:
    """
    prop if it is a column of schema, else None.

    prop may be qualified as "<model>.<field>"; a qualifier naming another
    model, or more than one dot, gives None.
    """
    parts = prop.split(".")
    if len(parts) > 1:
        if len(parts) != 2:
            return None
        if normalise_model_name(parts[0]) != schema.normalised_name:
            return None
        prop = parts[1]
    return prop if prop in schema.schema_keys else None


def filter_to_properties_on_model(schema: EntitySchema, properties: Any) -> List[str]:
    """The given properties that are columns of schema (collections excluded), unqualified."""
    return compact_map(list(to_array(properties)), lambda p, *_: get_property_on_model(schema, p))


def get_fields_to_select(
    schema: EntitySchema,
    select: Any,
    populate: PopulateSpec = None,
    populate_all: Optional[bool] = False,
    dont_populate: AliasList = None,
) -> List[str]:
    """
    Columns to select for select plus the populated single valued associations
    (their foreign keys must be selected for population to work).

    An empty result means "select everything".
    """
    fields_on_model = filter_to_properties_on_model(schema, select)
    if not fields_on_model:
        return []

    to_populate = get_attributes_to_populate(schema, populate, populate_all, dont_populate)
    return unique(filter_to_properties_on_model(schema, fields_on_model + to_populate))
