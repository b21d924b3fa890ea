"""
Association model for the Project <-> Employee many-to-many relationship.
"""

from sqlalchemy import Column, Integer, ForeignKey
from sqlalchemy.orm import relationship

from project_tracker.db.base import Base


class ProjectEmployee(Base):
    """One row per employee assigned to a project. The pair is the primary key."""
    
    __tablename__ = "project_employees"
    
    project_id = Column(
        Integer,
        ForeignKey("projects.id", ondelete="CASCADE"),
        primary_key=True,
    )
    employee_id = Column(
        Integer,
        ForeignKey("employees.id", ondelete="CASCADE"),
        primary_key=True,
        index=True,
    )
    
    # Relationships
    project = relationship("Project", back_populates="employee_links")
    employee = relationship("Employee", back_populates="project_links")
