"""
Base repository - generic async data access (SOLID: Interface Segregation, Dependency Inversion).
Exposes only what the create flow needs: insert, existence and count by predicate.
"""

from typing import Any, Generic, TypeVar

from sqlalchemy import ColumnElement, exists, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from catalog.db.base import Base

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """Generic async repository. Subclasses define model-specific queries."""

    def __init__(self, session: AsyncSession, model: type[ModelType]):
        self.session = session
        self.model = model

    async def add(self, entity: ModelType) -> ModelType:
        """Persist new entity. Caller commits session."""
        self.session.add(entity)
        await self.session.flush()  # Surface constraint violations now, commit later
        await self.session.refresh(entity)
        return entity

    async def exists(self, *criteria: ColumnElement[bool]) -> bool:
        """True if at least one row matches all criteria."""
        result = await self.session.execute(select(exists().where(*criteria)))
        return bool(result.scalar())

    async def count(self, *criteria: ColumnElement[bool]) -> int:
        """Number of rows matching all criteria."""
        stmt: Any = select(func.count()).select_from(self.model)
        if criteria:
            stmt = stmt.where(*criteria)
        result = await self.session.execute(stmt)
        return int(result.scalar_one())
