"""
Dependency injection container using dependency-injector.
Wires configuration, the database engine and the services.
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from dependency_injector import containers, providers
from sqlalchemy.ext.asyncio import AsyncSession

from project_tracker.core.config import settings
from project_tracker.db.session import build_engine, build_sessionmaker
from project_tracker.services.customer_service import CustomerService
from project_tracker.services.employee_service import EmployeeService
from project_tracker.services.project_service import ProjectService


class Container(containers.DeclarativeContainer):
    """Dependency injection container."""

    # Configuration
    config = providers.Configuration()

    # Database
    engine = providers.Singleton(
        build_engine,
        database_url=config.database_url,
        echo=config.echo,
    )
    session_maker = providers.Singleton(
        build_sessionmaker,
        engine=engine,
    )

    # Services are built per session: container.project_service(session=session)
    customer_service = providers.Factory(CustomerService)
    employee_service = providers.Factory(EmployeeService)
    project_service = providers.Factory(ProjectService)


class Services:
    """The three services sharing one session."""

    def __init__(self, container: Container, session: AsyncSession):
        self.session = session
        self.customers: CustomerService = container.customer_service(session=session)
        self.employees: EmployeeService = container.employee_service(session=session)
        self.projects: ProjectService = container.project_service(session=session)


@asynccontextmanager
async def service_scope(container: Optional[Container] = None) -> AsyncIterator[Services]:
    """Open a session for one logical operation and hand out services bound to it."""
    container = container or get_container()
    session_maker = container.session_maker()
    async with session_maker() as session:
        try:
            yield Services(container, session)
        except Exception:
            await session.rollback()
            raise


# Global container instance
_container: Optional[Container] = None


def get_container() -> Container:
    """Get the global dependency injection container."""
    global _container
    if _container is None:
        _container = Container()
        _container.config.from_dict({
            "database_url": settings.DATABASE_URL,
            "echo": settings.DATABASE_ECHO,
        })
    return _container
