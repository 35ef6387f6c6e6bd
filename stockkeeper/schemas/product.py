"""Product schemas: the stored record, its input shape and the edit form."""

from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic_core import PydanticCustomError

DEFAULT_LOW_STOCK_THRESHOLD = 10
DESCRIPTION_MAX_LENGTH = 200


class ProductCategory(str, Enum):
    """Canonical product categories offered by the edit form.

    Stored products carry plain strings, so a category outside this set is
    still a valid product.
    """

    CLOTHING = "Clothing"
    FOOTWEAR = "Footwear"
    ACCESSORIES = "Accessories"
    ELECTRONICS = "Electronics"
    HOME_GARDEN = "Home & Garden"
    SPORTS_OUTDOORS = "Sports & Outdoors"
    OTHER = "Other"

    @classmethod
    def values(cls) -> list[str]:
        """All category labels in display order."""
        return [member.value for member in cls]


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class ProductFields(BaseModel):
    """Shape of the caller-supplied product fields.

    Only checks that each value can represent its field. Business rules
    (non-empty name, non-negative amounts) belong to :class:`ProductForm`.
    """

    model_config = ConfigDict(str_strip_whitespace=True, extra="forbid")

    name: str
    quantity: int
    price: Decimal = Field(allow_inf_nan=False)
    category: str
    low_stock_threshold: int = DEFAULT_LOW_STOCK_THRESHOLD
    description: str | None = None

    @field_validator("category", mode="before")
    @classmethod
    def category_label(cls, value: Any) -> Any:
        if isinstance(value, ProductCategory):
            return value.value
        return value

    @field_validator("quantity", "low_stock_threshold", mode="before")
    @classmethod
    def reject_bool(cls, value: Any) -> Any:
        if isinstance(value, bool):
            raise PydanticCustomError("int_type", "Input should be a valid integer, not a boolean")
        return value


class Product(ProductFields):
    """A single inventory line item as held by the store.

    Instances are immutable; edit with ``model_copy(update=...)`` and hand
    the copy to ``ProductStore.update``.
    """

    model_config = ConfigDict(str_strip_whitespace=True, extra="forbid", frozen=True)

    id: str = Field(min_length=1)
    created_at: datetime
    updated_at: datetime

    @field_validator("created_at", "updated_at")
    @classmethod
    def normalize_timestamp(cls, value: datetime) -> datetime:
        return _as_utc(value)

    @model_validator(mode="after")
    def check_timestamp_order(self) -> "Product":
        if self.updated_at < self.created_at:
            raise ValueError("updated_at must not be earlier than created_at")
        return self

    @property
    def is_low_stock(self) -> bool:
        """Quantity at or below the threshold (includes out of stock)."""
        return self.quantity <= self.low_stock_threshold

    @property
    def is_out_of_stock(self) -> bool:
        return self.quantity == 0

    @property
    def total_value(self) -> Decimal:
        """Stock value at unit price, exact."""
        return self.quantity * self.price

    def __str__(self) -> str:
        return (
            f"Product(id={self.id}, name={self.name}, qty={self.quantity}, "
            f"price=${self.price}, category={self.category})"
        )


class ProductForm(BaseModel):
    """Human-entered product fields from the create/edit screen.

    Accepts the raw text of each input and applies the form's rules. Error
    messages are the short labels shown next to each field.
    """

    model_config = ConfigDict(extra="ignore")

    name: str
    price: Decimal
    quantity: int
    category: str
    low_stock_threshold: int = DEFAULT_LOW_STOCK_THRESHOLD
    description: str | None = None

    @field_validator("name", mode="before")
    @classmethod
    def validate_name(cls, value: Any) -> str:
        text = str(value).strip() if value is not None else ""
        if not text:
            raise PydanticCustomError("name_missing", "Please enter a product name")
        if len(text) < 2:
            raise PydanticCustomError("name_too_short", "Name must be at least 2 characters")
        return text

    @field_validator("price", mode="before")
    @classmethod
    def validate_price(cls, value: Any) -> Decimal:
        text = str(value).strip() if value is not None else ""
        if not text:
            raise PydanticCustomError("price_missing", "Enter price")
        try:
            price = Decimal(text)
        except InvalidOperation:
            raise PydanticCustomError("price_invalid", "Invalid price") from None
        exponent = price.as_tuple().exponent
        if not price.is_finite() or price < 0 or (isinstance(exponent, int) and exponent < -2):
            raise PydanticCustomError("price_invalid", "Invalid price")
        return price

    @field_validator("quantity", mode="before")
    @classmethod
    def validate_quantity(cls, value: Any) -> int:
        text = str(value).strip() if value is not None else ""
        if not text:
            raise PydanticCustomError("quantity_missing", "Enter qty")
        if not text.isdigit():
            raise PydanticCustomError("quantity_invalid", "Invalid qty")
        return int(text)

    @field_validator("low_stock_threshold", mode="before")
    @classmethod
    def validate_threshold(cls, value: Any) -> int:
        text = str(value).strip() if value is not None else ""
        if not text:
            return DEFAULT_LOW_STOCK_THRESHOLD
        if not text.isdigit():
            raise PydanticCustomError("threshold_invalid", "Invalid threshold")
        return int(text)

    @field_validator("category", mode="before")
    @classmethod
    def validate_category(cls, value: Any) -> str:
        label = value.value if isinstance(value, ProductCategory) else value
        if label not in ProductCategory.values():
            raise PydanticCustomError("category_invalid", "Choose a category")
        return label

    @field_validator("description", mode="before")
    @classmethod
    def blank_description(cls, value: Any) -> str | None:
        if value is None:
            return None
        text = str(value).strip()
        if len(text) > DESCRIPTION_MAX_LENGTH:
            raise PydanticCustomError(
                "description_too_long",
                "Description must be at most {max_length} characters",
                {"max_length": DESCRIPTION_MAX_LENGTH},
            )
        return text or None

    def to_create_kwargs(self) -> dict[str, Any]:
        """Keyword arguments for ``ProductStore.create``."""
        return self.model_dump()

    def apply_to(self, product: Product) -> Product:
        """Copy of ``product`` carrying the form's values."""
        return product.model_copy(update=self.model_dump())
