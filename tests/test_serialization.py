"""
Tests for the field registry and entity/DTO conversion.
"""

import uuid

import pytest
from sqlalchemy import Integer, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from generic_server.models import Author, Book
from generic_server.repositories import FieldNotFoundError, SQLAlchemyRepository, get_entity_fields
from generic_server.schemas import AuthorDTO, BookDTO
from generic_server.services.serialization import (
    dto_to_entity,
    serialize_entities,
    serialize_entity,
)


class _OtherBase(DeclarativeBase):
    pass


class _Edition(_OtherBase):
    """Composite key, not addressable by a single identifier."""

    __tablename__ = "test_editions"

    isbn: Mapped[str] = mapped_column(String(20), primary_key=True)
    printing: Mapped[int] = mapped_column(Integer, primary_key=True)


# =============================================================================
# Field registry
# =============================================================================

class TestEntityFields:
    """Tests for the cached field registry."""

    def test_identifier_and_columns(self):
        fields = get_entity_fields(Book)

        assert fields.identifier == "id"
        assert set(fields.columns) == {"id", "title", "isbn", "pages", "author_id"}
        assert set(fields.relationships) == {"author"}

    def test_updatable_excludes_identifier(self):
        assert "id" not in get_entity_fields(Book).updatable
        assert "title" in get_entity_fields(Book).updatable

    def test_registry_is_cached_per_class(self):
        assert get_entity_fields(Author) is get_entity_fields(Author)

    def test_unknown_column_raises_with_entity_and_key(self):
        with pytest.raises(FieldNotFoundError) as excinfo:
            get_entity_fields(Author).column("nickname")

        assert str(excinfo.value) == (
            "'Author' does not implement a public get property named 'nickname'."
        )

    def test_relationship_is_not_a_searchable_column(self):
        with pytest.raises(FieldNotFoundError):
            get_entity_fields(Author).column("books")

    def test_composite_primary_key_is_rejected(self):
        with pytest.raises(TypeError):
            get_entity_fields(_Edition)


# =============================================================================
# DTO -> entity
# =============================================================================

class TestDtoToEntity:
    """Tests for building entities from transfer objects."""

    def test_copies_same_named_fields(self):
        author_id = uuid.uuid4()

        book = dto_to_entity(
            BookDTO(title="Dune", isbn="9780441013593", pages=412, author_id=author_id),
            Book,
        )

        assert isinstance(book, Book)
        assert (book.title, book.isbn, book.pages, book.author_id) == (
            "Dune",
            "9780441013593",
            412,
            author_id,
        )

    def test_missing_fields_stay_unset(self):
        book = dto_to_entity(BookDTO(title="Dune"), Book)

        assert book.id is None
        assert book.pages is None
        assert book.isbn is None


# =============================================================================
# Entity -> JSON
# =============================================================================

class TestSerializeEntity:
    """Tests for JSON conversion of entities."""

    def test_none_serializes_to_none(self):
        assert serialize_entity(None) is None

    def test_transient_entity_has_all_columns_and_no_relations(self):
        data = serialize_entity(dto_to_entity(AuthorDTO(name="Ursula K. Le Guin"), Author))

        assert data == {"id": None, "name": "Ursula K. Le Guin", "biography": None}

    def test_identifier_is_rendered_as_string(self):
        author_id = uuid.uuid4()

        data = serialize_entity(Author(id=author_id, name="Frank Herbert"))

        assert data["id"] == str(author_id)

    def test_serialize_entities(self):
        data = serialize_entities([Author(name="A"), Author(name="B")])

        assert [d["name"] for d in data] == ["A", "B"]

    @pytest.mark.asyncio
    async def test_loaded_relations_are_nested_without_cycles(
        self, seed_author, seed_book, session_factory
    ):
        async with session_factory() as session:
            book = await SQLAlchemyRepository(Book, session).read_by_id_with_includes(
                seed_book.id, "author", "author.books"
            )

        data = serialize_entity(book)

        assert data["author"]["name"] == "Frank Herbert"
        # The book itself is already on the path, so it is not repeated
        assert data["author"]["books"] == []

    @pytest.mark.asyncio
    async def test_unloaded_relations_are_omitted(self, seed_book, session_factory):
        async with session_factory() as session:
            book = await SQLAlchemyRepository(Book, session).read_by_id(seed_book.id)

        data = serialize_entity(book)

        assert "author" not in data
        assert data["author_id"] == str(seed_book.author_id)
