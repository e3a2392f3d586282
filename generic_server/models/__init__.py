"""
SQLAlchemy ORM Models Package.

- base: Base class and EntityMixin (UUID identifier)
- library: Author, Book
"""

# Base classes
from .base import Base, EntityMixin

# Library
from .library import Author, Book

__all__ = [
    "Base",
    "EntityMixin",
    "Author",
    "Book",
]
