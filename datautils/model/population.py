"""
Association population policy.

Three caller options decide which associations of an entity are populated:

- populate: explicit include list (a list, a single alias, or a mapping of
  alias -> query modifier)
- populate_all: populate everything not listed in dont_populate
- dont_populate: explicit exclude list, only consulted with populate_all

An explicit populate list always wins over populate_all. With neither, nothing
is populated.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Mapping, Optional, Sequence, Union

from datautils.core.arrays import to_array, unique
from datautils.model.schema import EntitySchema

PopulateSpec = Union[None, str, Sequence[str], Mapping[str, Any]]
AliasList = Union[None, str, Sequence[str]]


@dataclass(frozen=True)
class PopulateDirective:
    alias: str
    modifier: Any = None


@dataclass
class PopulatePlan:
    populate_all: bool
    directives: List[PopulateDirective] = field(default_factory=list)

    @property
    def aliases(self) -> List[str]:
        return [d.alias for d in self.directives]


def _populate_names(populate: PopulateSpec) -> List[str]:
    if isinstance(populate, Mapping):
        return list(populate.keys())
    return to_array(populate)


def _modifier_for(populate: PopulateSpec, alias: str) -> Any:
    if isinstance(populate, Mapping):
        return populate.get(alias) or None
    return None


def should_populate_all(populate_all: Optional[bool], dont_populate: AliasList = None, populate: PopulateSpec = None) -> bool:
    return populate_all is True and not _populate_names(dont_populate) and not _populate_names(populate)


def should_populate_attribute(
    attribute: str,
    populate: PopulateSpec = None,
    populate_all: Optional[bool] = False,
    dont_populate: AliasList = None,
) -> bool:
    names = _populate_names(populate)
    excluded = to_array(dont_populate)

    if not names and populate_all is True:
        return attribute not in excluded
    return attribute in names


def get_attributes_to_populate(
    schema: EntitySchema,
    populate: PopulateSpec = None,
    populate_all: Optional[bool] = False,
    dont_populate: AliasList = None,
) -> List[str]:
    aliases = schema.association_aliases
    if should_populate_all(populate_all, dont_populate, populate):
        return aliases
    return [a for a in aliases if should_populate_attribute(a, populate, populate_all, dont_populate)]


def populate_plan(
    schema: EntitySchema,
    populate: PopulateSpec = None,
    populate_all: Optional[bool] = False,
    dont_populate: AliasList = None,
) -> PopulatePlan:
    """
    Resolve the options into the associations a query layer should populate,
    each with the modifier given for it in a populate mapping (if any).
    """
    if should_populate_all(populate_all, dont_populate, populate):
        return PopulatePlan(
            populate_all=True,
            directives=[PopulateDirective(alias=a) for a in schema.association_aliases],
        )

    directives = [
        PopulateDirective(alias=a, modifier=_modifier_for(populate, a))
        for a in unique(get_attributes_to_populate(schema, populate, populate_all, dont_populate))
    ]
    return PopulatePlan(populate_all=False, directives=directives)
