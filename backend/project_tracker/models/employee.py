"""
Employee model.
"""

from sqlalchemy import Column, Integer, String, Enum as SQLEnum
from sqlalchemy.orm import relationship
import enum

from project_tracker.db.base import Base


class EmployeeRole(str, enum.Enum):
    """Employee role enumeration."""
    DEVELOPER = "developer"
    MANAGER = "manager"
    DESIGNER = "designer"


class Employee(Base):
    """Employee model. Assigned to projects through ProjectEmployee rows."""
    
    __tablename__ = "employees"
    
    id = Column(Integer, primary_key=True, autoincrement=True, index=True)
    first_name = Column(String(50), nullable=False)
    last_name = Column(String(50), nullable=False)
    email = Column(String(150), nullable=True)
    phone = Column(String(20), nullable=True)
    role = Column(SQLEnum(EmployeeRole), nullable=False, default=EmployeeRole.DEVELOPER)
    
    # Relationships
    project_links = relationship(
        "ProjectEmployee",
        back_populates="employee",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
