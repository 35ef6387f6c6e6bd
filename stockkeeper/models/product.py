"""Product model - one row per inventory item.

Rows are version-tagged. ``to_product`` upgrades rows written by older
releases before decoding, so adding a column never strands existing data.
"""

from collections.abc import Callable
from decimal import Decimal
from typing import Any

from sqlalchemy import Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from stockkeeper.models.base import Base, DecimalText, TimestampMixin
from stockkeeper.schemas.product import DEFAULT_LOW_STOCK_THRESHOLD, Product

CURRENT_SCHEMA_VERSION = 2


def _upgrade_v1(data: dict[str, Any]) -> dict[str, Any]:
    # v1 rows predate per-product thresholds
    if data.get("low_stock_threshold") is None:
        data["low_stock_threshold"] = DEFAULT_LOW_STOCK_THRESHOLD
    return data


# from_version -> upgrade to from_version + 1
MIGRATIONS: dict[int, Callable[[dict[str, Any]], dict[str, Any]]] = {
    1: _upgrade_v1,
}


class UnsupportedSchemaVersion(ValueError):
    """Raised when a row was written by a newer, unknown schema version."""


def upgrade_row(data: dict[str, Any], version: int) -> dict[str, Any]:
    """Bring decoded row fields up to :data:`CURRENT_SCHEMA_VERSION`.

    Args:
        data: Column values keyed by attribute name
        version: ``schema_version`` stored with the row

    Returns:
        Field values in the current layout

    Raises:
        UnsupportedSchemaVersion: If no migration path exists
    """
    if version > CURRENT_SCHEMA_VERSION or version < 1:
        raise UnsupportedSchemaVersion(
            f"Row schema version {version} is not supported "
            f"(current is {CURRENT_SCHEMA_VERSION})"
        )
    while version < CURRENT_SCHEMA_VERSION:
        data = MIGRATIONS[version](data)
        version += 1
    return data


class ProductRecord(Base, TimestampMixin):
    """Durable form of :class:`~stockkeeper.schemas.product.Product`."""

    __tablename__ = "products"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    schema_version: Mapped[int] = mapped_column(
        Integer, nullable=False, default=CURRENT_SCHEMA_VERSION
    )
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    price: Mapped[Decimal] = mapped_column(DecimalText(), nullable=False)
    category: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    low_stock_threshold: Mapped[int | None] = mapped_column(Integer, nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    @classmethod
    def from_product(cls, product: Product) -> "ProductRecord":
        """Encode a product as a row in the current schema version."""
        return cls(
            id=product.id,
            schema_version=CURRENT_SCHEMA_VERSION,
            name=product.name,
            quantity=product.quantity,
            price=product.price,
            category=product.category,
            low_stock_threshold=product.low_stock_threshold,
            description=product.description,
            created_at=product.created_at,
            updated_at=product.updated_at,
        )

    def to_product(self) -> Product:
        """Decode this row, upgrading it from older schema versions."""
        data = {
            "id": self.id,
            "name": self.name,
            "quantity": self.quantity,
            "price": self.price,
            "category": self.category,
            "low_stock_threshold": self.low_stock_threshold,
            "description": self.description,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }
        return Product.model_validate(upgrade_row(data, self.schema_version))

    def __repr__(self) -> str:
        return f"<ProductRecord(id='{self.id}', name='{self.name}')>"
