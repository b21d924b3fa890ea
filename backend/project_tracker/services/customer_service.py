"""
Customer service with business logic.
"""

from typing import Any, List, Mapping, Optional, Union
from sqlalchemy.ext.asyncio import AsyncSession

from project_tracker.core.exceptions import InvalidFormError
from project_tracker.core.logging import get_logger
from project_tracker.db.repositories.customer_repository import CustomerRepository
from project_tracker.factories import customer_factory
from project_tracker.models.customer import Customer
from project_tracker.schemas.customer import CustomerCreate, CustomerUpdate, CustomerResponse
from project_tracker.services.base_service import BaseService

logger = get_logger(__name__)


class CustomerService(BaseService):
    """Service for customer operations."""

    def __init__(
        self,
        session: AsyncSession,
        customer_repo: Optional[CustomerRepository] = None,
    ):
        super().__init__(session)
        self.customer_repo = customer_repo or CustomerRepository(session)

    async def create_customer(
        self,
        form: Optional[Union[CustomerCreate, Mapping[str, Any]]],
    ) -> bool:
        """
        Create a new customer.

        Returns:
            True if the customer was stored, False for a missing or malformed
            form or an email already used by another customer
        """
        try:
            form = self._parse(CustomerCreate, form)

            if form.email and await self.customer_repo.get_by_email(form.email):
                logger.warning(f"Customer email {form.email} is already registered")
                return False

            customer = customer_factory.create_entity(form)
            await self.customer_repo.add(customer)
            logger.info(f"Created customer {customer.id}")
            return True
        except InvalidFormError as e:
            logger.warning(f"Rejected customer form: {e.message}", extra={"details": e.details})
            return False
        except Exception as e:
            logger.error(f"Error in create_customer: {e}", exc_info=True)
            await self._rollback()
            return False

    async def get_customers(self) -> List[CustomerResponse]:
        """Get all customers. Empty list when there are none."""
        try:
            customers = await self.customer_repo.get_all()
            return [customer_factory.to_response(customer) for customer in customers]
        except Exception as e:
            logger.error(f"Error in get_customers: {e}", exc_info=True)
            await self._rollback()
            return []

    async def get_customer(self, customer_id: int) -> Optional[CustomerResponse]:
        """Get customer by ID."""
        try:
            customer = await self.customer_repo.get(customer_id)
            if not customer:
                return None
            return customer_factory.to_response(customer)
        except Exception as e:
            logger.error(f"Error in get_customer: {e}", exc_info=True)
            await self._rollback()
            return None

    async def update_customer(
        self,
        customer_id: int,
        customer_data: Union[CustomerUpdate, Mapping[str, Any]],
    ) -> bool:
        """
        Update a customer field by field.

        Unset or blank fields keep their value. Moving the email onto an
        address owned by another customer rejects the whole update.

        Returns:
            True if something changed, False when the customer does not
            exist, the update is invalid or nothing would change
        """
        try:
            customer_data = self._parse(CustomerUpdate, customer_data)

            customer = await self.customer_repo.get(customer_id)
            if not customer:
                logger.warning(f"Customer {customer_id} not found")
                return False

            changes = self._drop_cleared(
                customer_data.model_dump(exclude_unset=True),
                required=("name",),
            )

            new_email = changes.get("email")
            if new_email is not None and new_email != customer.email:
                existing = await self.customer_repo.get_one(
                    Customer.email == new_email,
                    Customer.id != customer_id,
                )
                if existing:
                    logger.warning(
                        f"Email {new_email} already belongs to customer {existing.id}"
                    )
                    return False

            if not self._apply_changes(customer, changes):
                return False

            await self.customer_repo.update(customer)
            return True
        except InvalidFormError as e:
            logger.warning(f"Rejected customer update: {e.message}", extra={"details": e.details})
            return False
        except Exception as e:
            logger.error(f"Error in update_customer: {e}", exc_info=True)
            await self._rollback()
            return False

    async def delete_customer(self, customer_id: int) -> bool:
        """
        Delete a customer and, through the cascade, its projects.

        Callers decide beforehand whether the customer's projects may go;
        see ProjectService.complete_customer_projects.

        Returns:
            True if deleted, False if not found or on failure
        """
        try:
            customer = await self.customer_repo.get(customer_id)
            if not customer:
                return False

            return await self.customer_repo.delete(customer)
        except Exception as e:
            logger.error(f"Error in delete_customer: {e}", exc_info=True)
            await self._rollback()
            return False
