"""
Application bootstrap.
Configures logging, builds the DI container and prepares the database.
"""

from project_tracker.core.logging import setup_logging, get_logger
from project_tracker.db.session import create_tables, close_db
from project_tracker.deps import di_container
from project_tracker.deps.di_container import Container, get_container

logger = get_logger(__name__)


async def startup(container: Container = None, create_schema: bool = True) -> Container:
    """
    Startup sequence: logging, container, tables.

    Args:
        container: Container to use; defaults to the global one
        create_schema: Create missing tables (use migrations in production)
    """
    setup_logging()

    container = container or get_container()
    di_container._container = container

    if create_schema:
        await create_tables(container.engine())

    logger.info("Project tracker started")
    return container


async def shutdown(container: Container = None) -> None:
    """Dispose of database connections."""
    container = container or get_container()
    await close_db(container.engine())
    container.engine.reset()
    container.session_maker.reset()
    logger.info("Project tracker stopped")
