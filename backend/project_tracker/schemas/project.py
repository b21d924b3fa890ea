"""
Project Pydantic schemas: registration form, update and read model.
"""

from pydantic import BaseModel, Field, model_validator
from typing import Optional, List
from datetime import date, datetime

from project_tracker.models.project import ProjectStatus
from project_tracker.schemas.common import PartialUpdate


class ProjectBase(BaseModel):
    """Base project schema with common fields."""
    title: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = Field(None, max_length=2000)
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    status: ProjectStatus = ProjectStatus.NOT_STARTED


class ProjectCreate(ProjectBase):
    """Registration form for a new project."""
    customer_id: int
    
    @model_validator(mode='after')
    def validate_dates(self):
        """Validate that end_date is not before start_date."""
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValueError('End date must be after start date')
        return self


class ProjectUpdate(PartialUpdate):
    """
    Schema for updating a project.
    
    ``employee_ids`` left unset keeps the current assignments; any list,
    including an empty one, replaces them.
    """
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = Field(None, max_length=2000)
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    status: ProjectStatus
    employee_ids: Optional[List[int]] = None


class ProjectResponse(ProjectBase):
    """Read model for a project, with the owning customer's name inline."""
    id: int
    created_date: datetime
    customer_id: int
    customer_name: str
    employee_ids: List[int] = []
