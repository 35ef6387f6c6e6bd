"""Pydantic schemas for products and inventory summaries."""

from stockkeeper.schemas.inventory import InventoryStats, SortOption
from stockkeeper.schemas.product import (
    DEFAULT_LOW_STOCK_THRESHOLD,
    Product,
    ProductCategory,
    ProductFields,
    ProductForm,
)

__all__ = [
    "InventoryStats",
    "SortOption",
    "DEFAULT_LOW_STOCK_THRESHOLD",
    "Product",
    "ProductCategory",
    "ProductFields",
    "ProductForm",
]
