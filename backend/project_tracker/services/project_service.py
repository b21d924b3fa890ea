"""
Project service with business logic, including employee assignment.
"""

from typing import Any, List, Mapping, Optional, Union
from sqlalchemy.ext.asyncio import AsyncSession

from project_tracker.core.exceptions import InvalidFormError, ReferenceNotFoundError
from project_tracker.core.logging import get_logger
from project_tracker.db.repositories.customer_repository import CustomerRepository
from project_tracker.db.repositories.employee_repository import EmployeeRepository
from project_tracker.db.repositories.project_employee_repository import ProjectEmployeeRepository
from project_tracker.db.repositories.project_repository import ProjectRepository
from project_tracker.db.session import unit_of_work
from project_tracker.factories import customer_factory, project_factory
from project_tracker.models.employee import Employee
from project_tracker.models.project import Project, ProjectStatus
from project_tracker.models.project_employee import ProjectEmployee
from project_tracker.schemas.customer import CustomerResponse
from project_tracker.schemas.project import ProjectCreate, ProjectUpdate, ProjectResponse
from project_tracker.services.base_service import BaseService

logger = get_logger(__name__)


class ProjectService(BaseService):
    """Service for project operations."""

    def __init__(
        self,
        session: AsyncSession,
        project_repo: Optional[ProjectRepository] = None,
        employee_repo: Optional[EmployeeRepository] = None,
        customer_repo: Optional[CustomerRepository] = None,
        project_employee_repo: Optional[ProjectEmployeeRepository] = None,
    ):
        super().__init__(session)
        self.project_repo = project_repo or ProjectRepository(session)
        self.employee_repo = employee_repo or EmployeeRepository(session)
        self.customer_repo = customer_repo or CustomerRepository(session)
        self.project_employee_repo = project_employee_repo or ProjectEmployeeRepository(session)

    # Create

    async def create_project(
        self,
        form: Optional[Union[ProjectCreate, Mapping[str, Any]]],
    ) -> bool:
        """
        Create a new project for an existing customer.

        Returns:
            True if stored; False when the form is missing or malformed, the
            customer does not exist, or the entity could not be built
        """
        try:
            form = self._parse(ProjectCreate, form)

            customer = await self.customer_repo.get(form.customer_id)
            if customer is None:
                logger.warning(f"Cannot create project: customer {form.customer_id} does not exist")
                return False

            project = project_factory.create_entity(form, customer)
            await self.project_repo.add(project)
            logger.info(f"Created project {project.id} for customer {customer.id}")
            return True
        except (InvalidFormError, ReferenceNotFoundError) as e:
            logger.warning(f"Cannot create project: {e.message}", extra={"details": e.details})
            return False
        except Exception as e:
            logger.error(f"Error in create_project: {e}", exc_info=True)
            await self._rollback()
            return False

    # Read

    async def get_projects(self) -> List[ProjectResponse]:
        """Get all projects with their customer name filled in."""
        try:
            projects = await self.project_repo.get_all_with_customer()
            return [project_factory.to_response(project) for project in projects]
        except Exception as e:
            logger.error(f"Error in get_projects: {e}", exc_info=True)
            await self._rollback()
            return []

    async def get_project(self, project_id: int) -> Optional[ProjectResponse]:
        """Get project by ID."""
        try:
            project = await self.project_repo.get(project_id)
            if not project:
                return None
            return project_factory.to_response(project)
        except Exception as e:
            logger.error(f"Error in get_project: {e}", exc_info=True)
            await self._rollback()
            return None

    async def get_projects_by_customer_id(self, customer_id: int) -> List[ProjectResponse]:
        """Projects owned by a customer."""
        projects = await self.get_projects()
        return [project for project in projects if project.customer_id == customer_id]

    async def get_projects_by_customer_name_or_email(self, search_term: str) -> List[ProjectResponse]:
        """
        Projects whose customer's name or email contains the search term.
        Matching is case-sensitive.
        """
        if search_term is None:
            return []

        try:
            projects = await self.project_repo.get_all_with_customer()
        except Exception as e:
            logger.error(f"Error in get_projects_by_customer_name_or_email: {e}", exc_info=True)
            await self._rollback()
            return []

        matches = [
            project
            for project in projects
            if project.customer is not None
            and (
                search_term in project.customer.name
                or (project.customer.email is not None and search_term in project.customer.email)
            )
        ]
        return [project_factory.to_response(project) for project in matches]

    async def get_projects_by_employee_id(self, employee_id: int) -> List[ProjectResponse]:
        """Projects an employee is assigned to."""
        try:
            projects = await self.project_employee_repo.get_projects_by_employee_id(employee_id)
            return [project_factory.to_response(project) for project in projects]
        except Exception as e:
            logger.error(f"Error in get_projects_by_employee_id: {e}", exc_info=True)
            await self._rollback()
            return []

    async def get_available_customers(self) -> List[CustomerResponse]:
        """Customers a new project can be registered for."""
        try:
            customers = await self.customer_repo.get_all()
            return [customer_factory.to_response(customer) for customer in customers]
        except Exception as e:
            logger.error(f"Error in get_available_customers: {e}", exc_info=True)
            await self._rollback()
            return []

    # Update

    async def update_project(
        self,
        project_id: int,
        project_data: Union[ProjectUpdate, Mapping[str, Any]],
    ) -> bool:
        """
        Update a project and optionally replace its employee assignments.

        Title, description and dates left unset or blank keep their value.
        Status is applied on every call. When ``employee_ids`` is given the
        current assignments are deleted and one row per id is inserted; an
        empty list clears them. All steps commit together or not at all.

        Returns:
            True if anything changed; False when the project does not exist,
            an employee id is unknown, the dates are inverted or nothing
            would change
        """
        try:
            project_data = self._parse(ProjectUpdate, project_data)

            async with unit_of_work(self.session):
                project = await self.project_repo.get(project_id)
                if not project:
                    logger.warning(f"Project {project_id} not found")
                    return False

                changes = self._drop_cleared(
                    project_data.model_dump(exclude_unset=True),
                    required=("title", "status"),
                )
                changes["status"] = project_data.status
                employee_ids = changes.pop("employee_ids", None)

                start_date = changes.get("start_date", project.start_date)
                end_date = changes.get("end_date", project.end_date)
                if start_date and end_date and end_date < start_date:
                    logger.warning(f"Project {project_id}: end date {end_date} is before start date {start_date}")
                    return False

                if employee_ids is not None:
                    employee_ids = list(dict.fromkeys(employee_ids))
                    known = {
                        employee.id
                        for employee in await self.employee_repo.get_all(Employee.id.in_(employee_ids))
                    }
                    unknown = [employee_id for employee_id in employee_ids if employee_id not in known]
                    if unknown:
                        logger.warning(f"Project {project_id}: unknown employee ids {unknown}")
                        return False

                has_changes = self._apply_changes(project, changes)
                if not has_changes and employee_ids is None:
                    return False

                if employee_ids is not None:
                    await self.project_employee_repo.remove_all_employees_from_project(project_id)
                    for employee_id in employee_ids:
                        await self.project_employee_repo.add(
                            ProjectEmployee(project_id=project_id, employee_id=employee_id)
                        )

                await self.project_repo.update(project)

            return True
        except InvalidFormError as e:
            logger.warning(f"Rejected project update: {e.message}", extra={"details": e.details})
            return False
        except Exception as e:
            logger.error(f"Error in update_project: {e}", exc_info=True)
            await self._rollback()
            return False

    async def complete_customer_projects(self, customer_id: int) -> int:
        """
        Mark every unfinished project of a customer as completed.

        Returns:
            Number of projects that changed status
        """
        try:
            async with unit_of_work(self.session):
                projects = await self.project_repo.get_all(
                    Project.customer_id == customer_id,
                    Project.status != ProjectStatus.COMPLETED,
                )
                for project in projects:
                    project.status = ProjectStatus.COMPLETED
                    await self.project_repo.update(project)

            if projects:
                logger.info(f"Completed {len(projects)} project(s) of customer {customer_id}")
            return len(projects)
        except Exception as e:
            logger.error(f"Error in complete_customer_projects: {e}", exc_info=True)
            await self._rollback()
            return 0

    # Delete

    async def delete_project(self, project_id: int) -> bool:
        """
        Delete a project and its assignments.

        Deleting a project that does not exist counts as success.
        """
        try:
            project = await self.project_repo.get(project_id)
            if project is None:
                logger.info(f"Project {project_id} already absent, nothing to delete")
                return True

            return await self.project_repo.delete(project)
        except Exception as e:
            logger.error(f"Error in delete_project: {e}", exc_info=True)
            await self._rollback()
            return False

    # Assignment

    async def assign_employees(self, project_id: int, employee_ids: List[int]) -> bool:
        """
        Assign employees to a project.

        Ids that do not match an employee are ignored, and employees already
        on the project are skipped, so repeating an assignment is harmless.

        Returns:
            False when the project does not exist or none of the ids match
            an employee, otherwise True
        """
        try:
            project = await self.project_repo.get(project_id)
            if project is None:
                logger.warning(f"Project {project_id} not found")
                return False

            employees = await self.employee_repo.get_all(Employee.id.in_(employee_ids or []))
            if not employees:
                logger.warning(f"No known employees among {employee_ids}")
                return False

            async with unit_of_work(self.session):
                assigned = await self.project_employee_repo.get_employee_ids(project_id)
                for employee in employees:
                    if employee.id in assigned:
                        logger.info(f"Employee {employee.id} already assigned to project {project_id}, skipping")
                        continue
                    await self.project_employee_repo.add(
                        ProjectEmployee(project_id=project_id, employee_id=employee.id)
                    )
            return True
        except Exception as e:
            logger.error(f"Error in assign_employees: {e}", exc_info=True)
            await self._rollback()
            return False

    async def remove_employee_from_project(self, project_id: int, employee_id: int) -> bool:
        """Unassign one employee from one project. False if the pair did not exist."""
        try:
            return await self.project_employee_repo.remove_employee_from_project(project_id, employee_id)
        except Exception as e:
            logger.error(f"Error in remove_employee_from_project: {e}", exc_info=True)
            await self._rollback()
            return False
