"""
Repository Pattern implementation.

Usage:
    from generic_server.repositories import SQLAlchemyRepository

    repo = SQLAlchemyRepository(Author, session)
    author = await repo.read_by_id(author_id)
    authors = await repo.find("name", "Herb")
"""

from .base import BaseRepository
from .fields import EntityFields, FieldNotFoundError, get_entity_fields
from .generic import SQLAlchemyRepository

__all__ = [
    # Contract
    "BaseRepository",
    # Field registry
    "EntityFields",
    "FieldNotFoundError",
    "get_entity_fields",
    # SQLAlchemy implementation
    "SQLAlchemyRepository",
]
