"""
Services used by the generic controllers.

Provides:
- dto_to_entity: Structural DTO -> entity conversion
- serialize_entity / serialize_entities: Entity -> JSON-compatible data
"""

from .serialization import dto_to_entity, serialize_entity, serialize_entities

__all__ = [
    "dto_to_entity",
    "serialize_entity",
    "serialize_entities",
]
