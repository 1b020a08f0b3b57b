from .data import (
    clean_input_data,
    format_migration_boolean,
    format_migration_data,
    format_migration_date,
    remove_associations_from_data,
    remove_collections_from_data,
)
from .fields import filter_to_properties_on_model, get_fields_to_select, get_property_on_model
from .population import (
    PopulateDirective,
    PopulatePlan,
    get_attributes_to_populate,
    populate_plan,
    should_populate_all,
    should_populate_attribute,
)
from .schema import (
    Association,
    AssociationKind,
    EntitySchema,
    SchemaRegistry,
    get_association_model_name,
    normalise_model_name,
)

__all__ = [
    "Association",
    "AssociationKind",
    "EntitySchema",
    "PopulateDirective",
    "PopulatePlan",
    "SchemaRegistry",
    "clean_input_data",
    "filter_to_properties_on_model",
    "format_migration_boolean",
    "format_migration_data",
    "format_migration_date",
    "get_association_model_name",
    "get_attributes_to_populate",
    "get_fields_to_select",
    "get_property_on_model",
    "normalise_model_name",
    "populate_plan",
    "remove_associations_from_data",
    "remove_collections_from_data",
    "should_populate_all",
    "should_populate_attribute",
]
