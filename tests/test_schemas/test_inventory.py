"""Tests for inventory schemas."""

from decimal import Decimal

import pytest
from pydantic import ValidationError

from stockkeeper.schemas.inventory import InventoryStats, SortOption


def test_sort_options():
    assert [option.value for option in SortOption] == ["name", "price", "quantity", "category"]


def test_sort_option_from_string():
    assert SortOption("price") is SortOption.PRICE


def test_inventory_stats_is_frozen():
    stats = InventoryStats(
        total_product_count=1,
        total_inventory_value=Decimal("2.50"),
        low_stock_count=1,
        out_of_stock_count=0,
        total_quantity=1,
        category_count=1,
        average_value=Decimal("2.50"),
    )

    with pytest.raises(ValidationError):
        stats.total_product_count = 2  # type: ignore[misc]
