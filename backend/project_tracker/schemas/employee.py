"""
Employee Pydantic schemas: registration form, update and read model.
"""

from pydantic import BaseModel, EmailStr, Field
from typing import Optional

from project_tracker.models.employee import EmployeeRole
from project_tracker.schemas.common import PartialUpdate


class EmployeeBase(BaseModel):
    """Base employee schema with common fields."""
    first_name: str = Field(..., min_length=1, max_length=50)
    last_name: str = Field(..., min_length=1, max_length=50)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, max_length=20)
    role: EmployeeRole = EmployeeRole.DEVELOPER


class EmployeeCreate(EmployeeBase):
    """Registration form for a new employee."""
    pass


class EmployeeUpdate(PartialUpdate):
    """
    Schema for updating an employee.
    
    Text fields are optional; the role is re-asserted on every update.
    """
    first_name: Optional[str] = Field(None, min_length=1, max_length=50)
    last_name: Optional[str] = Field(None, min_length=1, max_length=50)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, max_length=20)
    role: EmployeeRole


class EmployeeResponse(EmployeeBase):
    """Read model for an employee."""
    id: int
    
    class Config:
        from_attributes = True
