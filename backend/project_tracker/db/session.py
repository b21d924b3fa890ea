"""
Database session management with async SQLAlchemy 2.0.
Handles engine creation, session lifecycle and explicit units of work.
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    create_async_engine,
    async_sessionmaker,
)

from project_tracker.core.config import settings
from project_tracker.core.logging import get_logger

logger = get_logger(__name__)

# Session.info key marking that repositories must flush instead of commit
UNIT_OF_WORK_KEY = "unit_of_work"


def enable_sqlite_foreign_keys(engine: AsyncEngine) -> None:
    """Switch on FK enforcement (and with it ON DELETE CASCADE) for SQLite connections."""
    if engine.dialect.name != "sqlite":
        return
    
    @event.listens_for(engine.sync_engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def build_engine(
    database_url: Optional[str] = None,
    echo: Optional[bool] = None,
    **engine_kwargs,
) -> AsyncEngine:
    """Create async SQLAlchemy engine with connection pooling."""
    database_url = database_url or settings.DATABASE_URL
    echo = settings.DATABASE_ECHO if echo is None else echo
    
    if not database_url.startswith("sqlite"):
        # SQLite uses a single-connection pool; pool sizing only applies to server databases
        engine_kwargs.setdefault("pool_size", settings.DATABASE_POOL_SIZE)
        engine_kwargs.setdefault("max_overflow", settings.DATABASE_MAX_OVERFLOW)
        engine_kwargs.setdefault("pool_pre_ping", True)
    
    engine = create_async_engine(database_url, echo=echo, **engine_kwargs)
    enable_sqlite_foreign_keys(engine)
    
    logger.info(
        "Database engine created",
        extra={"dialect": engine.dialect.name},
    )
    return engine


def build_sessionmaker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create async sessionmaker."""
    session_maker = async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
    logger.info("Sessionmaker created")
    return session_maker


def in_unit_of_work(session: AsyncSession) -> bool:
    """Whether the session is currently inside ``unit_of_work``."""
    return bool(session.info.get(UNIT_OF_WORK_KEY))


@asynccontextmanager
async def unit_of_work(session: AsyncSession) -> AsyncIterator[AsyncSession]:
    """
    Group several repository calls into one all-or-nothing commit.
    
    Inside the block repositories only flush. The block commits once on
    success and rolls back everything on any exception. Nested use joins
    the outer unit of work.
    """
    if in_unit_of_work(session):
        yield session
        return
    
    session.info[UNIT_OF_WORK_KEY] = True
    try:
        yield session
        await session.commit()
    except Exception:
        await session.rollback()
        raise
    finally:
        session.info.pop(UNIT_OF_WORK_KEY, None)


async def create_tables(engine: AsyncEngine) -> None:
    """Create all tables registered on the declarative base."""
    # Registers every model with Base.metadata
    import project_tracker.models  # noqa: F401
    from project_tracker.db.base import Base
    
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables created")


async def close_db(engine: Optional[AsyncEngine]) -> None:
    """Close database connections."""
    if engine:
        await engine.dispose()
        logger.info("Database connections closed")
