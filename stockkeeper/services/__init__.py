"""Services - the product store and its sample data."""

from stockkeeper.services.product_store import (
    ChangeKind,
    ProductStore,
    StoreChange,
)
from stockkeeper.services.seed_data import SAMPLE_PRODUCTS

__all__ = [
    "ChangeKind",
    "ProductStore",
    "StoreChange",
    "SAMPLE_PRODUCTS",
]
