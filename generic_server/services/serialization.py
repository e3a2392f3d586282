"""
Conversion between transfer objects, entities and JSON.

DTO -> entity is a structural re-encoding: the DTO is dumped to a plain
dict and the entity is built from the keys it knows. No per-entity mapper
is needed, but a field the DTO leaves out (or sends as null) is simply
absent on the entity.

Entity -> JSON emits every column plus each relationship that is already
loaded. Unloaded relationships are left out, which keeps async sessions
from attempting implicit IO during serialization.

Usage:
    from generic_server.services.serialization import dto_to_entity, serialize_entity

    book = dto_to_entity(BookDTO(title="Dune"), Book)
    payload = serialize_entity(book)
"""

from __future__ import annotations

from typing import Any, TypeVar

from fastapi.encoders import jsonable_encoder
from pydantic import BaseModel
from sqlalchemy import inspect as sa_inspect

from generic_server.repositories.fields import get_entity_fields

ModelT = TypeVar("ModelT")


def dto_to_entity(dto: BaseModel, model: type[ModelT]) -> ModelT:
    """
    Build an entity from a DTO.

    Args:
        dto: Validated transfer object.
        model: Target SQLAlchemy model class.

    Returns:
        A transient entity holding the DTO's non-null values.
    """
    fields = get_entity_fields(model)
    data = dto.model_dump(exclude_none=True)
    return model(**{key: value for key, value in data.items() if key in fields.columns})


def _entity_to_dict(entity: Any, path: set[int]) -> dict[str, Any]:
    state = sa_inspect(entity)
    fields = get_entity_fields(type(entity))
    unloaded = state.unloaded

    result: dict[str, Any] = {}
    for key in fields.columns:
        result[key] = None if key in unloaded else state.dict.get(key)

    path = path | {id(entity)}
    for key in fields.relationships:
        if key in unloaded or key not in state.dict:
            continue
        value = state.dict[key]
        if value is None:
            result[key] = None
        elif isinstance(value, (list, tuple, set)):
            result[key] = [
                _entity_to_dict(child, path) for child in value if id(child) not in path
            ]
        elif id(value) not in path:
            result[key] = _entity_to_dict(value, path)

    return result


def serialize_entity(entity: Any) -> Any:
    """
    Convert an entity to JSON-compatible data.

    Args:
        entity: SQLAlchemy model instance (transient or persistent) or None.

    Returns:
        Dict of column values and loaded relationships.
    """
    if entity is None:
        return None
    return jsonable_encoder(_entity_to_dict(entity, set()))


def serialize_entities(entities: Any) -> list[Any]:
    """Convert a sequence of entities to a JSON-compatible list."""
    return [serialize_entity(entity) for entity in entities]
