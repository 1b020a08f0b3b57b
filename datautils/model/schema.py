from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Set

from pydantic import BaseModel, Field

from datautils.core.strings import remove_underscores
from datautils.errors import MissingParameterError, UnknownEntityError


class AssociationKind(str, Enum):
    MODEL = "model"            # single valued, stored as a foreign key column
    COLLECTION = "collection"  # multi valued, not a column


class Association(BaseModel):
    alias: str
    kind: AssociationKind
    target: str


class EntitySchema(BaseModel):
    """
    Shape of an entity as seen by the population and field helpers.

    scalar_fields are the plain columns; field_types optionally records the
    declared type of a column ("datetime", "boolean", ...).
    """
    name: str
    scalar_fields: Set[str] = Field(default_factory=set)
    associations: List[Association] = Field(default_factory=list)
    field_types: Dict[str, str] = Field(default_factory=dict)

    @property
    def normalised_name(self) -> str:
        return normalise_model_name(self.name) or ""

    @property
    def association_aliases(self) -> List[str]:
        return [a.alias for a in self.associations]

    @property
    def collection_aliases(self) -> List[str]:
        return [a.alias for a in self.associations if a.kind == AssociationKind.COLLECTION]

    @property
    def schema_keys(self) -> Set[str]:
        """Column names: scalar fields plus single valued associations."""
        singles = {a.alias for a in self.associations if a.kind == AssociationKind.MODEL}
        return set(self.scalar_fields) | singles

    @property
    def attribute_names(self) -> Set[str]:
        """Every attribute, collections included."""
        return set(self.scalar_fields) | set(self.association_aliases)

    def get_association(self, alias: str) -> Optional[Association]:
        for a in self.associations:
            if a.alias == alias:
                return a
        return None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "EntitySchema":
        """
        Build a schema from an attribute definition mapping:

            {"name": "vehicle",
             "attributes": {"id": {"type": "integer"},
                            "registration": "string",
                            "owner": {"model": "customer"},
                            "services": {"collection": "service"}}}
        """
        scalar_fields: Set[str] = set()
        field_types: Dict[str, str] = {}
        associations: List[Association] = []

        for attr_name, definition in (data.get("attributes") or {}).items():
            if isinstance(definition, str):
                definition = {"type": definition}
            definition = definition or {}

            if definition.get("collection"):
                associations.append(Association(
                    alias=attr_name, kind=AssociationKind.COLLECTION, target=str(definition["collection"]),
                ))
            elif definition.get("model"):
                associations.append(Association(
                    alias=attr_name, kind=AssociationKind.MODEL, target=str(definition["model"]),
                ))
            else:
                scalar_fields.add(attr_name)
                if definition.get("type"):
                    field_types[attr_name] = str(definition["type"])

        return cls(
            name=str(data.get("name", "")),
            scalar_fields=scalar_fields,
            associations=associations,
            field_types=field_types,
        )


def normalise_model_name(model_name: Any) -> Optional[str]:
    """Lowercase with underscores removed ("Service_Item" -> "serviceitem"); None if not a string."""
    if not isinstance(model_name, str):
        return None
    return remove_underscores(model_name).lower()


def get_association_model_name(association: Association) -> str:
    return association.target


class SchemaRegistry:
    """Entity schemas keyed by normalised model name."""

    def __init__(self, schemas: Optional[List[EntitySchema]] = None):
        self._schemas: Dict[str, EntitySchema] = {}
        for s in schemas or []:
            self.register(s)

    def register(self, schema: EntitySchema) -> None:
        self._schemas[schema.normalised_name] = schema

    def list_names(self) -> List[str]:
        return sorted(self._schemas.keys())

    def get(self, model_name: Optional[str]) -> EntitySchema:
        if not model_name:
            raise MissingParameterError("A model name is required")
        schema = self._schemas.get(normalise_model_name(model_name) or "")
        if schema is None:
            raise UnknownEntityError(
                f"Unknown model: {model_name}",
                details={"model": model_name, "known": self.list_names()},
            )
        return schema
