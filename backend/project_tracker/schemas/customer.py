"""
Customer Pydantic schemas: registration form, partial update and read model.
"""

from pydantic import BaseModel, EmailStr, Field
from typing import Optional

from project_tracker.schemas.common import PartialUpdate


class CustomerBase(BaseModel):
    """Base customer schema with common fields."""
    name: str = Field(..., min_length=1, max_length=100)
    email: Optional[EmailStr] = None
    phone_number: Optional[str] = Field(None, max_length=20)


class CustomerCreate(CustomerBase):
    """Registration form for a new customer."""
    pass


class CustomerUpdate(PartialUpdate):
    """Schema for updating a customer (all fields optional)."""
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    email: Optional[EmailStr] = None
    phone_number: Optional[str] = Field(None, max_length=20)


class CustomerResponse(CustomerBase):
    """Read model for a customer."""
    id: int
    
    class Config:
        from_attributes = True
