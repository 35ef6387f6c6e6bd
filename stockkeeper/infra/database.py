"""Async database configuration for the local SQLite file.

Provides:
- Async SQLAlchemy engine and session factory bound to one database file
- A transactional session scope that commits or rolls back as a unit

Engines are created explicitly by whoever owns them (the product store);
there is no module-level engine.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from stockkeeper.config import Settings
from stockkeeper.infra.logging import get_logger

logger = get_logger(__name__)


def create_engine(settings: Settings) -> AsyncEngine:
    """Create the async engine for the configured database file.

    Creates the data directory when it does not exist yet.

    Args:
        settings: Application settings

    Returns:
        AsyncEngine bound to ``settings.database_url``

    Raises:
        OSError: If the data directory cannot be created
    """
    settings.data_dir.mkdir(parents=True, exist_ok=True)

    logger.info(
        "Creating database engine",
        database_path=str(settings.database_path),
    )

    return create_async_engine(
        settings.database_url,
        echo=settings.debug,  # Log SQL in debug mode
        connect_args={"timeout": settings.db_timeout},
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create a session factory bound to ``engine``."""
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@asynccontextmanager
async def session_scope(
    factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    """Open a session that commits on success and rolls back on error.

    Args:
        factory: Session factory from :func:`create_session_factory`

    Yields:
        AsyncSession inside a single transaction

    Example:
        async with session_scope(factory) as session:
            session.add(record)
            # committed when the block exits without raising
    """
    session = factory()

    try:
        yield session
        await session.commit()

    except Exception as e:
        await session.rollback()
        logger.debug("Database session rolled back", error=str(e))
        raise

    finally:
        await session.close()


async def dispose_engine(engine: AsyncEngine) -> None:
    """Close the engine and all pooled connections."""
    logger.info("Closing database engine")
    await engine.dispose()
