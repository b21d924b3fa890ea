"""
Base repository class with common CRUD operations.
Repositories handle database access using async SQLAlchemy sessions.
"""

from typing import Any, Generic, TypeVar, Type, Optional, List
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import inspect, select
from sqlalchemy.sql import Select

from project_tracker.db.base import Base
from project_tracker.db.session import in_unit_of_work

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """Base repository with common CRUD operations."""

    def __init__(self, model: Type[ModelType], session: AsyncSession):
        """
        Initialize repository.

        Args:
            model: SQLAlchemy model class
            session: Async database session
        """
        self.model = model
        self.session = session

    def _base_query(self) -> Select:
        """Query every read starts from. Subclasses add eager loading here."""
        return select(self.model)

    async def _save(self) -> None:
        """Flush pending changes and commit, unless a unit of work owns the commit."""
        await self.session.flush()
        if not in_unit_of_work(self.session):
            await self.session.commit()

    async def add(self, entity: ModelType) -> ModelType:
        """
        Insert a new record.

        Args:
            entity: Transient model instance

        Returns:
            The persisted instance with its identity populated
        """
        self.session.add(entity)
        await self._save()
        await self.session.refresh(entity)
        return entity

    async def get(self, id: Any) -> Optional[ModelType]:
        """
        Get a record by primary key.

        Args:
            id: Record ID

        Returns:
            Model instance or None
        """
        return await self.get_one(self.model.id == id)

    async def get_one(self, *criteria) -> Optional[ModelType]:
        """
        Get the first record matching the criteria.

        Args:
            *criteria: SQLAlchemy filter expressions, e.g. ``Customer.email == email``

        Returns:
            Model instance or None when nothing matches
        """
        query = self._base_query()
        if criteria:
            query = query.where(*criteria)
        result = await self.session.execute(query.limit(1))
        return result.scalars().first()

    async def get_all(self, *criteria) -> List[ModelType]:
        """
        List records, optionally filtered.

        The criteria are translated into the WHERE clause and evaluated by
        the database, not in memory.

        Args:
            *criteria: SQLAlchemy filter expressions

        Returns:
            List of model instances (empty when nothing matches)
        """
        query = self._base_query()
        if criteria:
            query = query.where(*criteria)
        query = query.order_by(*inspect(self.model).primary_key)
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def update(self, entity: ModelType) -> ModelType:
        """
        Persist mutations already applied to a fetched record.

        Args:
            entity: Model instance with changed attributes

        Returns:
            The updated model instance
        """
        if entity not in self.session:
            self.session.add(entity)
        await self._save()
        return entity

    async def delete(self, entity: ModelType) -> bool:
        """
        Delete a record.

        Args:
            entity: Model instance to remove

        Returns:
            True once the row is deleted
        """
        await self.session.delete(entity)
        await self._save()
        return True
