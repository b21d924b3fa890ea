"""
Customer model. A customer owns zero or more projects.
"""

from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship

from project_tracker.db.base import Base


class Customer(Base):
    """Customer model for project ownership."""
    
    __tablename__ = "customers"
    
    id = Column(Integer, primary_key=True, autoincrement=True, index=True)
    name = Column(String(100), nullable=False)
    email = Column(String(150), nullable=True, unique=True, index=True)
    phone_number = Column(String(20), nullable=True)
    
    # Relationships
    projects = relationship(
        "Project",
        back_populates="customer",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
