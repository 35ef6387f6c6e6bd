"""Tests for the composition root."""

from pathlib import Path

import pytest

from stockkeeper.config import Settings
from stockkeeper.errors import InitializationError
from stockkeeper.main import open_store


@pytest.mark.asyncio
async def test_open_store_yields_ready_store(settings: Settings):
    """Test open_store hands out an initialized store."""
    async with open_store(settings) as store:
        assert store.is_ready
        assert store.stats().total_product_count == 10

    assert not store.is_ready


@pytest.mark.asyncio
async def test_open_store_closes_on_error(settings: Settings):
    """Test the store is closed when the body raises."""
    with pytest.raises(KeyError):
        async with open_store(settings) as store:
            raise KeyError("ui failure")

    assert not store.is_ready


@pytest.mark.asyncio
async def test_open_store_surfaces_initialization_error(tmp_path: Path):
    """Test initialization failures reach the caller."""
    blocker = tmp_path / "file"
    blocker.write_text("x")

    with pytest.raises(InitializationError):
        async with open_store(Settings(environment="test", data_dir=blocker)):
            pass
