"""
Pydantic transfer objects for the registered entities.

DTOs describe the wire shape of request bodies. They carry no identifier;
every field maps onto a same-named entity column.
"""

from uuid import UUID

from pydantic import BaseModel, Field


# =============================================================================
# Author Schemas
# =============================================================================


class AuthorDTO(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    biography: str | None = None


# =============================================================================
# Book Schemas
# =============================================================================


class BookDTO(BaseModel):
    title: str = Field(min_length=1, max_length=300)
    isbn: str | None = Field(default=None, max_length=20)
    pages: int | None = Field(default=None, ge=1)
    author_id: UUID | None = None
