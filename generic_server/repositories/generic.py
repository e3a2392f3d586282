"""
Generic SQLAlchemy repository.

One implementation of the repository contract that works for any mapped
entity with a single UUID primary key.

Usage:
    from generic_server.repositories import SQLAlchemyRepository

    repo = SQLAlchemyRepository(Book, session)

    book = await repo.create(Book(title="Dune"))
    books = await repo.read_all_with_includes("author")
    matches = await repo.find("title", "Dun")
"""

from __future__ import annotations

from typing import Any, Sequence
from uuid import UUID

from sqlalchemy import String, Uuid, cast, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from sqlalchemy.sql import Select

from crud_shared.config.logging import get_logger
from crud_shared.infrastructure.db import safe_commit
from .base import BaseRepository, ModelT
from .fields import EntityFields, get_entity_fields

logger = get_logger(__name__)


class SQLAlchemyRepository(BaseRepository[ModelT]):
    """
    Repository backed by an AsyncSession.

    Every write commits immediately; a failed commit is rolled back and the
    original exception re-raised.
    """

    def __init__(self, model: type[ModelT], session: AsyncSession):
        if session is None:
            raise ValueError("session is required")
        self._model = model
        self._session = session
        self._fields: EntityFields = get_entity_fields(model)

    @property
    def model(self) -> type[ModelT]:
        """The SQLAlchemy model class."""
        return self._model

    @property
    def session(self) -> AsyncSession:
        """The database session."""
        return self._session

    @property
    def fields(self) -> EntityFields:
        """Field registry of the model."""
        return self._fields

    def _base_query(self) -> Select:
        return select(self._model)

    def _loader_option(self, path: str) -> Any:
        """
        Build a selectinload option for a relationship path.

        "author" loads Book.author, "author.books" additionally loads the
        author's books. Unknown names fail inside SQLAlchemy.
        """
        current: Any = self._model
        option = None
        for part in path.split("."):
            attribute = getattr(current, part)
            option = selectinload(attribute) if option is None else option.selectinload(attribute)
            current = attribute.property.mapper.class_
        return option

    def _apply_includes(self, query: Select, includes: Sequence[str]) -> Select:
        for include in includes:
            query = query.options(self._loader_option(include))
        return query

    # =========================================================================
    # Create
    # =========================================================================

    async def create(self, entity: ModelT) -> ModelT | None:
        self._session.add(entity)
        await safe_commit(self._session)
        logger.debug("Entity created", entity=self._model.__name__)
        return entity

    # =========================================================================
    # Read
    # =========================================================================

    async def read_all(self) -> Sequence[ModelT] | None:
        return (await self._session.scalars(self._base_query())).all()

    async def read_all_with_includes(self, *includes: str) -> Sequence[ModelT] | None:
        query = self._apply_includes(self._base_query(), includes)
        return (await self._session.scalars(query)).all()

    async def read_by_id(self, entity_id: UUID) -> ModelT | None:
        return await self._session.get(self._model, entity_id)

    async def read_by_id_with_includes(
        self, entity_id: UUID, *includes: str
    ) -> ModelT | None:
        identifier = getattr(self._model, self._fields.identifier)
        query = self._apply_includes(
            self._base_query().where(identifier == entity_id), includes
        )
        return await self._session.scalar(query)

    # =========================================================================
    # Update / Delete
    # =========================================================================

    async def update(self, entity_id: UUID, entity: ModelT) -> ModelT | None:
        """
        Copy every non-None column value of ``entity`` onto the stored row.

        None means "not sent", so a field cannot be cleared this way. The
        identifier and relationships are never copied. The supplied entity,
        not the merged row, is returned.
        """
        existing = await self._session.get(self._model, entity_id)
        if existing is None:
            return None

        changed = []
        for key in self._fields.updatable:
            value = self._fields.get(entity, key)
            if value is None:
                continue
            self._fields.set(existing, key, value)
            changed.append(key)

        await safe_commit(self._session)
        logger.debug(
            "Entity updated",
            entity=self._model.__name__,
            entity_id=str(entity_id),
            fields=changed,
        )
        return entity

    async def delete(self, entity_id: UUID) -> ModelT | None:
        entity = await self._session.get(self._model, entity_id)
        if entity is not None:
            await self._session.delete(entity)
            await safe_commit(self._session)
            logger.debug(
                "Entity deleted", entity=self._model.__name__, entity_id=str(entity_id)
            )
        return entity

    # =========================================================================
    # Search
    # =========================================================================

    def _stored_text(self, key: str, value: str) -> str:
        """
        Translate a search value into the column's text form inside the database.

        UUIDs on dialects without a native type are stored as 32 hex digits,
        while their textual representation carries dashes.
        """
        column_type = self._fields.columns[key].columns[0].type
        if isinstance(column_type, Uuid):
            native = column_type.native_uuid and self._session.bind.dialect.supports_native_uuid
            if not native:
                return value.replace("-", "")
        return value

    async def find(self, key: str, value: str | None) -> list[ModelT]:
        """
        Return entities whose field ``key``, as text, contains ``value``.

        The match is case-sensitive on every dialect. LIKE narrows the rows in
        the database (its case handling depends on the collation) and the
        result is then checked against each entity's text value.
        """
        column = self._fields.column(key)

        query = self._base_query()
        if value is None:
            return list((await self._session.scalars(query)).all())

        pattern = self._stored_text(key, value)
        query = query.where(cast(column, String).contains(pattern, autoescape=True))
        candidates = (await self._session.scalars(query)).all()

        return [
            entity
            for entity in candidates
            if value in str(self._fields.get(entity, key))
        ]
