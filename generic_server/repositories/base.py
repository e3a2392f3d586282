"""
Repository contract.
Describes the data access operations every registered entity gets.
"""

from abc import ABC, abstractmethod
from typing import Generic, Sequence, TypeVar
from uuid import UUID

ModelT = TypeVar("ModelT")


class BaseRepository(ABC, Generic[ModelT]):
    """
    Abstract repository for one entity type.

    Implementations translate each call into a single unit of work against
    the persistence layer. Absent results are returned as None.
    """

    @abstractmethod
    async def create(self, entity: ModelT) -> ModelT | None:
        """
        Persist a new entity.

        Args:
            entity: The entity to create.

        Returns:
            The entity as stored, with generated fields assigned.
        """
        ...

    @abstractmethod
    async def read_all(self) -> Sequence[ModelT] | None:
        """
        Return all entities.

        Returns:
            Every stored entity; None only when no data source is available.
        """
        ...

    @abstractmethod
    async def read_all_with_includes(self, *includes: str) -> Sequence[ModelT] | None:
        """
        Return all entities with the named relationships eager-loaded.

        Args:
            includes: Relationship names (dotted for nested), loaded in order.
        """
        ...

    @abstractmethod
    async def read_by_id(self, entity_id: UUID) -> ModelT | None:
        """Return the entity with the given identifier, if any."""
        ...

    @abstractmethod
    async def read_by_id_with_includes(
        self, entity_id: UUID, *includes: str
    ) -> ModelT | None:
        """Return the entity with the given identifier and relationships loaded."""
        ...

    @abstractmethod
    async def update(self, entity_id: UUID, entity: ModelT) -> ModelT | None:
        """
        Partially update an entity.

        Args:
            entity_id: Identifier of the stored entity.
            entity: Carrier of the new values; None values are skipped.

        Returns:
            The supplied entity, or None if nothing matched the identifier.
        """
        ...

    @abstractmethod
    async def delete(self, entity_id: UUID) -> ModelT | None:
        """
        Delete an entity.

        Returns:
            The removed entity, or None if nothing matched the identifier.
        """
        ...

    @abstractmethod
    async def find(self, key: str, value: str | None) -> list[ModelT]:
        """
        Find entities whose field contains a substring.

        Args:
            key: Name of the field to search by.
            value: Substring to look for; None returns every entity.

        Returns:
            Matching entities.
        """
        ...
