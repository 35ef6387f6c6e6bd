"""Inventory-level schemas: list ordering and the dashboard snapshot."""

from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class SortOption(str, Enum):
    """Orderings offered by the product list.

    Price sorts most expensive first; every other option sorts ascending.
    """

    NAME = "name"
    PRICE = "price"
    QUANTITY = "quantity"
    CATEGORY = "category"


class InventoryStats(BaseModel):
    """Point-in-time aggregate statistics over the whole collection."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    total_product_count: int = Field(description="Number of products")
    total_inventory_value: Decimal = Field(description="Sum of quantity * price")
    low_stock_count: int = Field(description="Products at or below their threshold")
    out_of_stock_count: int = Field(description="Products with zero quantity")
    total_quantity: int = Field(description="Units across all products")
    category_count: int = Field(description="Distinct categories present")
    average_value: Decimal = Field(description="Inventory value per product")
