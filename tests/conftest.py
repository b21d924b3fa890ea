"""
Pytest configuration and fixtures.
Provides an in-memory database session and services bound to it.
"""

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool

import project_tracker.models  # noqa: F401
from project_tracker.db.base import Base
from project_tracker.db.session import enable_sqlite_foreign_keys
from project_tracker.models.employee import EmployeeRole
from project_tracker.services.customer_service import CustomerService
from project_tracker.services.employee_service import EmployeeService
from project_tracker.services.project_service import ProjectService


# Test database URL (in-memory SQLite for testing)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture(scope="function")
async def test_engine():
    """
    Create a test engine with all tables.
    Uses in-memory SQLite on a single shared connection.
    """
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)
    
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    
    yield engine
    
    # Cleanup
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture(scope="function")
async def test_db_session(test_engine):
    """Create a test database session."""
    test_session_maker = async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
    
    async with test_session_maker() as session:
        yield session


@pytest.fixture
def customer_service(test_db_session):
    return CustomerService(test_db_session)


@pytest.fixture
def employee_service(test_db_session):
    return EmployeeService(test_db_session)


@pytest.fixture
def project_service(test_db_session):
    return ProjectService(test_db_session)


@pytest.fixture
def make_customer(customer_service):
    """Create a customer and return its read model."""
    async def _make(name="Acme", email="a@acme.com", phone_number="555"):
        assert await customer_service.create_customer(
            {"name": name, "email": email, "phone_number": phone_number}
        )
        customers = await customer_service.get_customers()
        return next(c for c in customers if c.name == name)
    return _make


@pytest.fixture
def make_employee(employee_service):
    """Create an employee and return its read model."""
    async def _make(first_name="John", last_name="Doe", role=EmployeeRole.DEVELOPER, **extra):
        assert await employee_service.create_employee(
            {"first_name": first_name, "last_name": last_name, "role": role, **extra}
        )
        employees = await employee_service.get_employees()
        return employees[-1]
    return _make


@pytest.fixture
def make_project(project_service):
    """Create a project for a customer and return its read model."""
    async def _make(customer_id, title="Launch", **extra):
        assert await project_service.create_project(
            {"title": title, "customer_id": customer_id, **extra}
        )
        projects = await project_service.get_projects()
        return projects[-1]
    return _make
