"""
Mapping between customer forms, entities and read models.
"""

from typing import Optional

from project_tracker.core.exceptions import InvalidFormError
from project_tracker.models.customer import Customer
from project_tracker.schemas.customer import CustomerCreate, CustomerResponse


def create_entity(form: Optional[CustomerCreate]) -> Customer:
    """Build a new Customer entity from a registration form."""
    if form is None:
        raise InvalidFormError("Customer form is missing")
    
    return Customer(
        name=form.name,
        email=form.email,
        phone_number=form.phone_number,
    )


def to_response(entity: Customer) -> CustomerResponse:
    """Convert customer model to read model."""
    return CustomerResponse.model_validate(entity)
