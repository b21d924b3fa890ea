"""
Employee service with business logic.
"""

from typing import Any, List, Mapping, Optional, Union
from sqlalchemy.ext.asyncio import AsyncSession

from project_tracker.core.exceptions import InvalidFormError
from project_tracker.core.logging import get_logger
from project_tracker.db.repositories.employee_repository import EmployeeRepository
from project_tracker.db.repositories.project_employee_repository import ProjectEmployeeRepository
from project_tracker.factories import employee_factory, project_factory
from project_tracker.schemas.employee import EmployeeCreate, EmployeeUpdate, EmployeeResponse
from project_tracker.schemas.project import ProjectResponse
from project_tracker.services.base_service import BaseService

logger = get_logger(__name__)


class EmployeeService(BaseService):
    """Service for employee operations."""

    def __init__(
        self,
        session: AsyncSession,
        employee_repo: Optional[EmployeeRepository] = None,
        project_employee_repo: Optional[ProjectEmployeeRepository] = None,
    ):
        super().__init__(session)
        self.employee_repo = employee_repo or EmployeeRepository(session)
        self.project_employee_repo = project_employee_repo or ProjectEmployeeRepository(session)

    async def create_employee(
        self,
        form: Optional[Union[EmployeeCreate, Mapping[str, Any]]],
    ) -> bool:
        """Create a new employee. False for a missing or malformed form."""
        try:
            form = self._parse(EmployeeCreate, form)
            employee = employee_factory.create_entity(form)
            await self.employee_repo.add(employee)
            logger.info(f"Created employee {employee.id}")
            return True
        except InvalidFormError as e:
            logger.warning(f"Rejected employee form: {e.message}", extra={"details": e.details})
            return False
        except Exception as e:
            logger.error(f"Error in create_employee: {e}", exc_info=True)
            await self._rollback()
            return False

    async def get_employees(self) -> List[EmployeeResponse]:
        """Get all employees."""
        try:
            employees = await self.employee_repo.get_all()
            return [employee_factory.to_response(employee) for employee in employees]
        except Exception as e:
            logger.error(f"Error in get_employees: {e}", exc_info=True)
            await self._rollback()
            return []

    async def get_employee(self, employee_id: int) -> Optional[EmployeeResponse]:
        """Get employee by ID."""
        try:
            employee = await self.employee_repo.get(employee_id)
            if not employee:
                return None
            return employee_factory.to_response(employee)
        except Exception as e:
            logger.error(f"Error in get_employee: {e}", exc_info=True)
            await self._rollback()
            return None

    async def update_employee(
        self,
        employee_id: int,
        employee_data: Union[EmployeeUpdate, Mapping[str, Any]],
    ) -> bool:
        """
        Update an employee.

        Text fields left unset or blank keep their value. The role must be
        given on every call and must be a known EmployeeRole; an unknown
        role rejects the whole update.

        Returns:
            True if something changed, otherwise False
        """
        try:
            employee_data = self._parse(EmployeeUpdate, employee_data)

            employee = await self.employee_repo.get(employee_id)
            if not employee:
                logger.warning(f"Employee {employee_id} not found")
                return False

            changes = self._drop_cleared(
                employee_data.model_dump(exclude_unset=True),
                required=("first_name", "last_name"),
            )
            # Role is re-asserted even when it was not explicitly set
            changes["role"] = employee_data.role

            if not self._apply_changes(employee, changes):
                return False

            await self.employee_repo.update(employee)
            return True
        except InvalidFormError as e:
            logger.warning(f"Rejected employee update: {e.message}", extra={"details": e.details})
            return False
        except Exception as e:
            logger.error(f"Error in update_employee: {e}", exc_info=True)
            await self._rollback()
            return False

    async def delete_employee(self, employee_id: int) -> bool:
        """
        Delete an employee. Its project assignments are removed with it.

        Returns:
            True if deleted, False if not found or on failure
        """
        try:
            employee = await self.employee_repo.get(employee_id)
            if not employee:
                return False

            return await self.employee_repo.delete(employee)
        except Exception as e:
            logger.error(f"Error in delete_employee: {e}", exc_info=True)
            await self._rollback()
            return False

    async def get_assigned_projects(self, employee_id: int) -> List[ProjectResponse]:
        """Projects the employee is currently assigned to."""
        try:
            projects = await self.project_employee_repo.get_projects_by_employee_id(employee_id)
            return [project_factory.to_response(project) for project in projects]
        except Exception as e:
            logger.error(f"Error in get_assigned_projects: {e}", exc_info=True)
            await self._rollback()
            return []

    async def remove_from_all_projects(self, employee_id: int) -> bool:
        """
        Unassign an employee from every project while keeping the employee.

        Returns:
            True if at least one assignment was removed; False when the
            employee does not exist or was not assigned anywhere
        """
        try:
            employee = await self.employee_repo.get(employee_id)
            if not employee:
                logger.warning(f"Employee {employee_id} not found")
                return False

            removed = await self.project_employee_repo.remove_employee_from_all_projects(employee_id)
            if removed:
                logger.info(f"Employee {employee_id} removed from all projects")
            return removed
        except Exception as e:
            logger.error(f"Error in remove_from_all_projects: {e}", exc_info=True)
            await self._rollback()
            return False
