"""
Project repository for database operations.
"""

from typing import List
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from sqlalchemy.orm import joinedload, selectinload

from project_tracker.db.repositories.base_repository import BaseRepository
from project_tracker.models.project import Project


class ProjectRepository(BaseRepository[Project]):
    """Repository for project operations."""
    
    def __init__(self, session: AsyncSession):
        super().__init__(Project, session)
    
    def _base_query(self):
        """
        Base query with eager loading of customer and assignment rows.
        
        populate_existing refreshes projects already in the identity map, so
        assignment changes made through the link repository show up on re-read.
        """
        return (
            select(Project)
            .options(
                selectinload(Project.customer),
                selectinload(Project.employee_links),
            )
            .execution_options(populate_existing=True)
        )
    
    async def get_all_with_customer(self) -> List[Project]:
        """List every project with its customer joined into the same query."""
        query = (
            select(Project)
            .options(
                joinedload(Project.customer),
                selectinload(Project.employee_links),
            )
            .order_by(Project.id)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(query)
        return list(result.scalars().all())
