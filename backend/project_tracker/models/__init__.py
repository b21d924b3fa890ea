"""
Database models.
Import all models here to ensure they're registered with Base.
"""

from project_tracker.models.customer import Customer
from project_tracker.models.employee import Employee, EmployeeRole
from project_tracker.models.project import Project, ProjectStatus
from project_tracker.models.project_employee import ProjectEmployee

__all__ = [
    "Customer",
    "Employee",
    "EmployeeRole",
    "Project",
    "ProjectStatus",
    "ProjectEmployee",
]
