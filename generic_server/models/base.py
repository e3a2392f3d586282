"""
Base class and identifier mixin for all SQLAlchemy ORM models.
"""

from __future__ import annotations

import uuid

from sqlalchemy import Uuid
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all models."""

    pass


class EntityMixin:
    """
    Mixin providing the UUID primary key every registered entity needs.

    The identifier is generated client-side on insert, so it is available
    right after the flush without a round trip.
    """

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}(id={getattr(self, 'id', None)})>"
