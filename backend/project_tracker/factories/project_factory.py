"""
Mapping between project forms, entities and read models.
"""

from typing import List, Optional

from sqlalchemy import inspect

from project_tracker.core.config import settings
from project_tracker.core.exceptions import InvalidFormError, ReferenceNotFoundError
from project_tracker.models.customer import Customer
from project_tracker.models.project import Project
from project_tracker.schemas.project import ProjectCreate, ProjectResponse


def create_entity(form: Optional[ProjectCreate], customer: Optional[Customer]) -> Project:
    """
    Build a new Project entity owned by ``customer``.
    
    The creation timestamp is assigned by the model default on insert and
    never touched again.
    """
    if form is None:
        raise InvalidFormError("Project form is missing")
    if customer is None or customer.id is None:
        raise ReferenceNotFoundError("Customer", form.customer_id)
    
    return Project(
        title=form.title,
        description=form.description,
        start_date=form.start_date,
        end_date=form.end_date,
        status=form.status,
        customer_id=customer.id,
    )


def _loaded(entity: Project, attribute: str) -> bool:
    """Whether a relationship is loaded; reading an unloaded one would need IO."""
    return attribute not in inspect(entity).unloaded


def _customer_name(entity: Project) -> str:
    if _loaded(entity, "customer") and entity.customer is not None:
        return entity.customer.name
    return settings.UNKNOWN_CUSTOMER_NAME


def _employee_ids(entity: Project) -> List[int]:
    if not _loaded(entity, "employee_links"):
        return []
    return sorted(link.employee_id for link in entity.employee_links)


def to_response(entity: Project) -> ProjectResponse:
    """Convert project model to read model."""
    return ProjectResponse(
        id=entity.id,
        title=entity.title,
        description=entity.description,
        start_date=entity.start_date,
        end_date=entity.end_date,
        status=entity.status,
        created_date=entity.created_date,
        customer_id=entity.customer_id,
        customer_name=_customer_name(entity),
        employee_ids=_employee_ids(entity),
    )
