"""
Customer repository for database operations.
"""

from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession

from project_tracker.db.repositories.base_repository import BaseRepository
from project_tracker.models.customer import Customer


class CustomerRepository(BaseRepository[Customer]):
    """Repository for customer operations."""
    
    def __init__(self, session: AsyncSession):
        super().__init__(Customer, session)
    
    async def get_by_email(self, email: str) -> Optional[Customer]:
        """Get customer by email."""
        return await self.get_one(Customer.email == email)
