"""
Library Models: Author, Book.
"""

from __future__ import annotations

import uuid
from typing import Optional

from sqlalchemy import ForeignKey, Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, EntityMixin


class Author(EntityMixin, Base):
    """A book author."""

    __tablename__ = "authors"

    name: Mapped[Optional[str]] = mapped_column(String(200))
    biography: Mapped[Optional[str]] = mapped_column(Text)

    # Relationships
    books: Mapped[list["Book"]] = relationship(back_populates="author")


class Book(EntityMixin, Base):
    """A book, optionally written by an author."""

    __tablename__ = "books"

    title: Mapped[Optional[str]] = mapped_column(String(300))
    isbn: Mapped[Optional[str]] = mapped_column(String(20))
    pages: Mapped[Optional[int]] = mapped_column(Integer)
    author_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid, ForeignKey("authors.id"), index=True
    )

    # Relationships
    author: Mapped[Optional["Author"]] = relationship(back_populates="books")
