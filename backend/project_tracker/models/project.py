"""
Project model for customer work.
"""

from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, Text, Date, DateTime, ForeignKey, Enum as SQLEnum
from sqlalchemy.orm import relationship
import enum

from project_tracker.db.base import Base


class ProjectStatus(str, enum.Enum):
    """Project status enumeration. Any status may follow any other."""
    NOT_STARTED = "not-started"
    IN_PROGRESS = "in-progress"
    PAUSED = "paused"
    COMPLETED = "completed"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Project(Base):
    """Project model owned by exactly one customer."""
    
    __tablename__ = "projects"
    
    id = Column(Integer, primary_key=True, autoincrement=True, index=True)
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    start_date = Column(Date, nullable=True)
    end_date = Column(Date, nullable=True)
    status = Column(SQLEnum(ProjectStatus), nullable=False, default=ProjectStatus.NOT_STARTED)
    created_date = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
    customer_id = Column(
        Integer,
        ForeignKey("customers.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    
    # Relationships
    customer = relationship("Customer", back_populates="projects")
    employee_links = relationship(
        "ProjectEmployee",
        back_populates="project",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
