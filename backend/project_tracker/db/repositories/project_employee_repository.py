"""
Repository for the Project <-> Employee assignment rows.
"""

from typing import List, Set
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from sqlalchemy.orm import selectinload

from project_tracker.db.repositories.base_repository import BaseRepository
from project_tracker.models.project import Project
from project_tracker.models.project_employee import ProjectEmployee


class ProjectEmployeeRepository(BaseRepository[ProjectEmployee]):
    """Repository for project-employee assignments."""
    
    def __init__(self, session: AsyncSession):
        super().__init__(ProjectEmployee, session)
    
    async def _remove_all(self, *criteria) -> bool:
        """Delete every assignment row matching the criteria. False when there were none."""
        entries = await self.get_all(*criteria)
        if not entries:
            return False
        
        for entry in entries:
            await self.session.delete(entry)
        await self._save()
        return True
    
    async def remove_employee_from_project(self, project_id: int, employee_id: int) -> bool:
        """
        Remove one employee from one project.
        
        Returns:
            True if the assignment existed and was removed, False otherwise
        """
        entry = await self.get_one(
            ProjectEmployee.project_id == project_id,
            ProjectEmployee.employee_id == employee_id,
        )
        if entry is None:
            return False
        
        return await self.delete(entry)
    
    async def remove_all_employees_from_project(self, project_id: int) -> bool:
        """Remove every assignment of a project."""
        return await self._remove_all(ProjectEmployee.project_id == project_id)
    
    async def remove_employee_from_all_projects(self, employee_id: int) -> bool:
        """Remove every assignment of an employee, keeping the employee."""
        return await self._remove_all(ProjectEmployee.employee_id == employee_id)
    
    async def get_employees_by_project_id(self, project_id: int) -> List[ProjectEmployee]:
        """List the assignment rows of a project with the employee side loaded."""
        result = await self.session.execute(
            select(ProjectEmployee)
            .options(selectinload(ProjectEmployee.employee))
            .where(ProjectEmployee.project_id == project_id)
            .order_by(ProjectEmployee.employee_id)
        )
        return list(result.scalars().all())
    
    async def get_projects_by_employee_id(self, employee_id: int) -> List[Project]:
        """List the projects an employee is assigned to, with customer and assignments loaded."""
        result = await self.session.execute(
            select(Project)
            .join(ProjectEmployee, ProjectEmployee.project_id == Project.id)
            .options(
                selectinload(Project.customer),
                selectinload(Project.employee_links),
            )
            .where(ProjectEmployee.employee_id == employee_id)
            .order_by(Project.id)
            .execution_options(populate_existing=True)
        )
        return list(result.scalars().all())
    
    async def get_employee_ids(self, project_id: int) -> Set[int]:
        """Ids of the employees currently assigned to a project."""
        result = await self.session.execute(
            select(ProjectEmployee.employee_id).where(ProjectEmployee.project_id == project_id)
        )
        return set(result.scalars().all())
