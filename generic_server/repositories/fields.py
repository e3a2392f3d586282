"""
Field registry for mapped entities.

Update and Find address entity fields by name. Instead of reflecting on the
class on every call, the mapper is inspected once per entity class and the
result cached.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from typing import Any

from sqlalchemy import inspect as sa_inspect
from sqlalchemy.orm import ColumnProperty, RelationshipProperty
from sqlalchemy.orm.attributes import InstrumentedAttribute


class FieldNotFoundError(ValueError):
    """Raised when a field name does not match a readable column of the entity."""

    def __init__(self, model: type, key: str):
        self.model = model
        self.key = key
        super().__init__(
            f"'{model.__name__}' does not implement a public get property named '{key}'."
        )


@dataclass(frozen=True)
class EntityFields:
    """Column and relationship attributes of one entity class."""

    model: type
    identifier: str
    columns: dict[str, ColumnProperty]
    relationships: dict[str, RelationshipProperty]

    @property
    def updatable(self) -> tuple[str, ...]:
        """Column attribute names that update may overwrite."""
        return tuple(name for name in self.columns if name != self.identifier)

    def column(self, key: str) -> InstrumentedAttribute:
        """Return the class-bound attribute for a column, e.g. for a WHERE clause."""
        if key not in self.columns:
            raise FieldNotFoundError(self.model, key)
        return getattr(self.model, key)

    def get(self, entity: Any, key: str) -> Any:
        return getattr(entity, key)

    def set(self, entity: Any, key: str, value: Any) -> None:
        setattr(entity, key, value)


@lru_cache(maxsize=None)
def get_entity_fields(model: type) -> EntityFields:
    """
    Build (once) the field registry for a mapped class.

    Args:
        model: SQLAlchemy mapped class with a single-column primary key.

    Returns:
        EntityFields for the class.
    """
    mapper = sa_inspect(model)
    primary_key = mapper.primary_key
    if len(primary_key) != 1:
        raise TypeError(
            f"{model.__name__} must have exactly one primary key column, "
            f"found {len(primary_key)}"
        )
    identifier = mapper.get_property_by_column(primary_key[0]).key

    return EntityFields(
        model=model,
        identifier=identifier,
        columns={prop.key: prop for prop in mapper.column_attrs},
        relationships={prop.key: prop for prop in mapper.relationships},
    )
