"""
Mapping between employee forms, entities and read models.
"""

from typing import Optional

from project_tracker.core.exceptions import InvalidFormError
from project_tracker.models.employee import Employee
from project_tracker.schemas.employee import EmployeeCreate, EmployeeResponse


def create_entity(form: Optional[EmployeeCreate]) -> Employee:
    """Build a new Employee entity from a registration form."""
    if form is None:
        raise InvalidFormError("Employee form is missing")
    
    return Employee(
        first_name=form.first_name,
        last_name=form.last_name,
        email=form.email,
        phone=form.phone,
        role=form.role,
    )


def to_response(entity: Employee) -> EmployeeResponse:
    """Convert employee model to read model."""
    return EmployeeResponse.model_validate(entity)
