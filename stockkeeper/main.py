"""Composition root for the inventory tracker.

Builds settings, logging and the single :class:`ProductStore` the UI layers
share, and tears them down on exit.

Example:
    async with open_store() as store:
        dashboard.render(store.stats())
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from stockkeeper import __version__
from stockkeeper.config import Settings, get_settings
from stockkeeper.errors import InitializationError
from stockkeeper.infra.logging import get_logger, setup_logging
from stockkeeper.services.product_store import ProductStore

logger = get_logger(__name__)


@asynccontextmanager
async def open_store(settings: Settings | None = None) -> AsyncGenerator[ProductStore, None]:
    """Application lifespan handler.

    Startup:
    - Configure logging
    - Open the product database, seeding it on first run

    Shutdown:
    - Close the database engine

    Args:
        settings: Settings to use instead of the cached environment settings

    Yields:
        The initialized product store

    Raises:
        InitializationError: If storage cannot be opened; nothing that
            depends on the store should be shown
    """
    settings = settings or get_settings()
    setup_logging(settings)

    logger.info(
        "Inventory tracker starting",
        version=__version__,
        environment=settings.environment,
        database_path=str(settings.database_path),
    )

    store = ProductStore(settings)
    try:
        await store.initialize()
    except InitializationError as e:
        logger.error("Product store failed to open", error=e.detail)
        raise

    logger.info("Product store ready", product_count=store.total_product_count)

    try:
        yield store
    finally:
        logger.info("Inventory tracker shutting down")
        await store.close()
        logger.info("Cleanup complete")
