"""
ProjectService tests: project CRUD and employee assignment.
"""

from datetime import date

import pytest

from project_tracker.models.project import ProjectStatus
from project_tracker.schemas.project import ProjectCreate, ProjectUpdate


@pytest.mark.asyncio
async def test_create_project(project_service, make_customer):
    customer = await make_customer(name="Acme")
    form = ProjectCreate(
        title="Launch",
        description="Go live",
        start_date=date(2025, 1, 1),
        end_date=date(2025, 6, 30),
        customer_id=customer.id,
    )

    result = await project_service.create_project(form)
    projects = await project_service.get_projects()

    assert result is True
    assert len(projects) == 1
    project = projects[0]
    assert project.title == "Launch"
    assert project.description == "Go live"
    assert project.start_date == date(2025, 1, 1)
    assert project.end_date == date(2025, 6, 30)
    assert project.status == ProjectStatus.NOT_STARTED
    assert project.customer_id == customer.id
    assert project.customer_name == "Acme"
    assert project.employee_ids == []
    assert project.created_date is not None


@pytest.mark.asyncio
async def test_create_project_optional_fields_absent(project_service, make_customer):
    customer = await make_customer()

    assert await project_service.create_project({"title": "Bare", "customer_id": customer.id})

    project = (await project_service.get_projects())[0]
    assert project.description is None
    assert project.start_date is None
    assert project.end_date is None


@pytest.mark.asyncio
async def test_create_project_requires_existing_customer(project_service):
    result = await project_service.create_project({"title": "Orphan", "customer_id": 9999})

    assert result is False
    assert await project_service.get_projects() == []


@pytest.mark.asyncio
async def test_create_project_rejects_malformed_form(project_service, make_customer):
    customer = await make_customer()

    assert await project_service.create_project(None) is False
    assert await project_service.create_project({"customer_id": customer.id}) is False
    assert await project_service.create_project({
        "title": "Backwards",
        "customer_id": customer.id,
        "start_date": "2025-06-01",
        "end_date": "2025-01-01",
    }) is False


@pytest.mark.asyncio
async def test_get_project_by_id(project_service, make_customer, make_project):
    customer = await make_customer(name="Acme")
    project = await make_project(customer.id)

    found = await project_service.get_project(project.id)

    assert found == project
    assert found.customer_name == "Acme"
    assert await project_service.get_project(9999) is None


@pytest.mark.asyncio
async def test_created_date_not_changed_by_update(project_service, make_customer, make_project):
    customer = await make_customer()
    project = await make_project(customer.id)

    assert await project_service.update_project(
        project.id, ProjectUpdate(title="Renamed", status=ProjectStatus.IN_PROGRESS)
    )

    assert (await project_service.get_project(project.id)).created_date == project.created_date


@pytest.mark.asyncio
async def test_get_projects_by_customer_id(project_service, make_customer, make_project):
    acme = await make_customer(name="Acme", email="a@acme.com")
    globex = await make_customer(name="Globex", email="info@globex.com")
    await make_project(acme.id, title="A1")
    await make_project(globex.id, title="G1")
    await make_project(acme.id, title="A2")

    projects = await project_service.get_projects_by_customer_id(acme.id)

    assert [project.title for project in projects] == ["A1", "A2"]
    assert await project_service.get_projects_by_customer_id(9999) == []


@pytest.mark.asyncio
async def test_get_projects_by_customer_name_or_email(project_service, make_customer, make_project):
    acme = await make_customer(name="Acme", email="a@acme.com")
    globex = await make_customer(name="Globex", email="info@globex.com")
    await make_project(acme.id, title="A1")
    await make_project(globex.id, title="G1")

    by_name = await project_service.get_projects_by_customer_name_or_email("Acm")
    by_email = await project_service.get_projects_by_customer_name_or_email("info@")
    wrong_case = await project_service.get_projects_by_customer_name_or_email("ACME")

    assert [project.title for project in by_name] == ["A1"]
    assert [project.title for project in by_email] == ["G1"]
    assert wrong_case == []


@pytest.mark.asyncio
async def test_search_skips_customers_without_email(project_service, make_customer, make_project):
    customer = await make_customer(name="NoMail", email=None)
    await make_project(customer.id)

    assert await project_service.get_projects_by_customer_name_or_email("@") == []
    assert len(await project_service.get_projects_by_customer_name_or_email("NoMail")) == 1


@pytest.mark.asyncio
async def test_update_project_scalar_fields(project_service, make_customer, make_project):
    customer = await make_customer()
    project = await make_project(customer.id, description="Old")

    result = await project_service.update_project(
        project.id,
        {
            "title": "Relaunch",
            "description": "",
            "start_date": "2025-03-01",
            "end_date": "2025-04-01",
            "status": "paused",
        },
    )
    updated = await project_service.get_project(project.id)

    assert result is True
    assert updated.title == "Relaunch"
    assert updated.description == "Old"
    assert updated.start_date == date(2025, 3, 1)
    assert updated.end_date == date(2025, 4, 1)
    assert updated.status == ProjectStatus.PAUSED


@pytest.mark.asyncio
async def test_update_project_any_status_transition(project_service, make_customer, make_project):
    """Status may move between any two values."""
    customer = await make_customer()
    project = await make_project(customer.id, status=ProjectStatus.COMPLETED)

    assert await project_service.update_project(project.id, {"status": "not-started"})
    assert (await project_service.get_project(project.id)).status == ProjectStatus.NOT_STARTED


@pytest.mark.asyncio
async def test_update_project_without_changes_returns_false(project_service, make_customer, make_project):
    customer = await make_customer()
    project = await make_project(customer.id)

    result = await project_service.update_project(
        project.id,
        {"title": "", "description": " ", "status": project.status},
    )

    assert result is False
    assert await project_service.get_project(project.id) == project


@pytest.mark.asyncio
async def test_update_project_rejects_inverted_dates(project_service, make_customer, make_project):
    customer = await make_customer()
    project = await make_project(customer.id, start_date=date(2025, 5, 1))

    result = await project_service.update_project(
        project.id,
        ProjectUpdate(title="Changed", end_date=date(2025, 1, 1), status=ProjectStatus.IN_PROGRESS),
    )

    assert result is False
    assert await project_service.get_project(project.id) == project


@pytest.mark.asyncio
async def test_update_nonexistent_project_returns_false(project_service):
    result = await project_service.update_project(
        9999, ProjectUpdate(title="Ghost", status=ProjectStatus.IN_PROGRESS)
    )

    assert result is False


@pytest.mark.asyncio
async def test_update_project_replaces_employee_set(
    project_service, make_customer, make_employee, make_project
):
    """{A, B} updated with [C] becomes {C}; [] empties it; omitting the list keeps it."""
    customer = await make_customer()
    a = await make_employee(first_name="A")
    b = await make_employee(first_name="B")
    c = await make_employee(first_name="C")
    project = await make_project(customer.id)
    assert await project_service.assign_employees(project.id, [a.id, b.id])

    assert await project_service.update_project(
        project.id, ProjectUpdate(status=project.status, employee_ids=[c.id])
    )
    assert (await project_service.get_project(project.id)).employee_ids == [c.id]

    assert await project_service.update_project(
        project.id, ProjectUpdate(status=project.status, employee_ids=[])
    )
    assert (await project_service.get_project(project.id)).employee_ids == []

    assert await project_service.assign_employees(project.id, [a.id, b.id])
    assert await project_service.update_project(
        project.id, ProjectUpdate(title="Renamed", status=project.status)
    )
    assert (await project_service.get_project(project.id)).employee_ids == [a.id, b.id]


@pytest.mark.asyncio
async def test_update_project_keeps_same_employee_in_replacement(
    project_service, make_customer, make_employee, make_project
):
    """Replacing {A, B} with [B, C] re-inserts B without a key conflict."""
    customer = await make_customer()
    a = await make_employee(first_name="A")
    b = await make_employee(first_name="B")
    c = await make_employee(first_name="C")
    project = await make_project(customer.id)
    assert await project_service.assign_employees(project.id, [a.id, b.id])

    assert await project_service.update_project(
        project.id, {"status": project.status, "employee_ids": [b.id, c.id, c.id]}
    )

    assert (await project_service.get_project(project.id)).employee_ids == [b.id, c.id]


@pytest.mark.asyncio
async def test_update_project_unknown_employee_changes_nothing(
    project_service, make_customer, make_employee, make_project
):
    """An unknown employee id rejects the update before any row is touched."""
    customer = await make_customer()
    a = await make_employee(first_name="A")
    project = await make_project(customer.id)
    assert await project_service.assign_employees(project.id, [a.id])

    result = await project_service.update_project(
        project.id,
        ProjectUpdate(title="Changed", status=ProjectStatus.PAUSED, employee_ids=[9999]),
    )
    stored = await project_service.get_project(project.id)

    assert result is False
    assert stored.title == project.title
    assert stored.status == project.status
    assert stored.employee_ids == [a.id]


@pytest.mark.asyncio
async def test_delete_project(project_service, make_customer, make_employee, make_project):
    customer = await make_customer()
    employee = await make_employee()
    project = await make_project(customer.id)
    assert await project_service.assign_employees(project.id, [employee.id])

    assert await project_service.delete_project(project.id) is True

    assert await project_service.get_projects() == []
    assert await project_service.get_projects_by_employee_id(employee.id) == []


@pytest.mark.asyncio
async def test_delete_nonexistent_project_is_idempotent(project_service):
    """Deleting an unknown project succeeds, unlike customer and employee deletes."""
    assert await project_service.delete_project(9999) is True


@pytest.mark.asyncio
async def test_assign_employees_scenario(
    project_service, make_customer, make_employee
):
    """Customer -> project -> two assignments, found again through the customer."""
    customer = await make_customer(name="Acme", email="a@x.com", phone_number="555")
    first = await make_employee(first_name="First")
    second = await make_employee(first_name="Second")
    assert await project_service.create_project({"title": "Launch", "customer_id": customer.id})
    project_id = (await project_service.get_projects())[0].id

    assert await project_service.assign_employees(project_id, [first.id, second.id]) is True

    projects = await project_service.get_projects_by_customer_id(customer.id)
    assert len(projects) == 1
    assert projects[0].title == "Launch"
    assert set(projects[0].employee_ids) == {first.id, second.id}


@pytest.mark.asyncio
async def test_assign_employees_is_idempotent(project_service, make_customer, make_employee, make_project):
    """Re-assigning an already assigned employee is skipped, not an error."""
    customer = await make_customer()
    employee = await make_employee()
    project = await make_project(customer.id)

    assert await project_service.assign_employees(project.id, [employee.id])
    assert await project_service.assign_employees(project.id, [employee.id, employee.id])

    assert (await project_service.get_project(project.id)).employee_ids == [employee.id]


@pytest.mark.asyncio
async def test_assign_employees_failures(project_service, make_customer, make_employee, make_project):
    customer = await make_customer()
    employee = await make_employee()
    project = await make_project(customer.id)

    assert await project_service.assign_employees(9999, [employee.id]) is False
    assert await project_service.assign_employees(project.id, [9998, 9999]) is False
    assert await project_service.assign_employees(project.id, []) is False


@pytest.mark.asyncio
async def test_assign_employees_ignores_unknown_ids(project_service, make_customer, make_employee, make_project):
    customer = await make_customer()
    employee = await make_employee()
    project = await make_project(customer.id)

    assert await project_service.assign_employees(project.id, [employee.id, 9999]) is True
    assert (await project_service.get_project(project.id)).employee_ids == [employee.id]


@pytest.mark.asyncio
async def test_remove_employee_from_project(project_service, make_customer, make_employee, make_project):
    customer = await make_customer()
    a = await make_employee(first_name="A")
    b = await make_employee(first_name="B")
    project = await make_project(customer.id)
    assert await project_service.assign_employees(project.id, [a.id, b.id])

    assert await project_service.remove_employee_from_project(project.id, a.id) is True
    assert (await project_service.get_project(project.id)).employee_ids == [b.id]


@pytest.mark.asyncio
async def test_remove_unassigned_employee_returns_false(
    project_service, make_customer, make_employee, make_project
):
    """Removing an employee who is not on the project leaves the set unchanged."""
    customer = await make_customer()
    assigned = await make_employee(first_name="Assigned")
    other = await make_employee(first_name="Other")
    project = await make_project(customer.id)
    assert await project_service.assign_employees(project.id, [assigned.id])

    assert await project_service.remove_employee_from_project(project.id, other.id) is False
    assert (await project_service.get_project(project.id)).employee_ids == [assigned.id]


@pytest.mark.asyncio
async def test_get_available_customers(project_service, make_customer):
    await make_customer(name="Acme", email="a@acme.com")
    await make_customer(name="Globex", email="info@globex.com")

    customers = await project_service.get_available_customers()

    assert [customer.name for customer in customers] == ["Acme", "Globex"]


@pytest.mark.asyncio
async def test_complete_customer_projects(project_service, make_customer, make_project):
    acme = await make_customer(name="Acme", email="a@acme.com")
    globex = await make_customer(name="Globex", email="info@globex.com")
    await make_project(acme.id, title="Open", status=ProjectStatus.IN_PROGRESS)
    await make_project(acme.id, title="Done", status=ProjectStatus.COMPLETED)
    other = await make_project(globex.id, title="Elsewhere")

    changed = await project_service.complete_customer_projects(acme.id)

    assert changed == 1
    statuses = {p.title: p.status for p in await project_service.get_projects_by_customer_id(acme.id)}
    assert statuses == {"Open": ProjectStatus.COMPLETED, "Done": ProjectStatus.COMPLETED}
    assert (await project_service.get_project(other.id)).status == ProjectStatus.NOT_STARTED
    assert await project_service.complete_customer_projects(acme.id) == 0
