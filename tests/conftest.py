"""Shared fixtures: settings and stores bound to a temporary database."""

from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import AsyncGenerator, Callable

import pytest
import pytest_asyncio

from stockkeeper.config import Settings
from stockkeeper.services.product_store import ProductStore


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    """Settings pointing at a fresh database under tmp_path."""
    return Settings(environment="test", data_dir=tmp_path / "data", log_json=False)


@pytest.fixture
def empty_settings(settings: Settings) -> Settings:
    """Same database, but never seeded."""
    return settings.model_copy(update={"seed_sample_data": False})


@pytest.fixture
def ticking_clock() -> Callable[[], datetime]:
    """Clock advancing one second per call."""
    current = datetime(2024, 3, 1, 9, 0, 0, tzinfo=timezone.utc)

    def tick() -> datetime:
        nonlocal current
        current += timedelta(seconds=1)
        return current

    return tick


@pytest_asyncio.fixture
async def store(settings: Settings) -> AsyncGenerator[ProductStore, None]:
    """Initialized store holding the sample products."""
    product_store = ProductStore(settings)
    await product_store.initialize()
    yield product_store
    await product_store.close()


@pytest_asyncio.fixture
async def empty_store(
    empty_settings: Settings,
    ticking_clock: Callable[[], datetime],
) -> AsyncGenerator[ProductStore, None]:
    """Initialized store with no products and a deterministic clock."""
    product_store = ProductStore(empty_settings, clock=ticking_clock)
    await product_store.initialize()
    yield product_store
    await product_store.close()
