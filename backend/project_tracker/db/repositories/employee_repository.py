"""
Employee repository for database operations.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from project_tracker.db.repositories.base_repository import BaseRepository
from project_tracker.models.employee import Employee


class EmployeeRepository(BaseRepository[Employee]):
    """Repository for employee operations."""
    
    def __init__(self, session: AsyncSession):
        super().__init__(Employee, session)
