"""SQLAlchemy models for the local inventory database."""

from stockkeeper.models.base import Base, DecimalText, TimestampMixin, UTCDateTime
from stockkeeper.models.product import CURRENT_SCHEMA_VERSION, ProductRecord

__all__ = [
    "Base",
    "DecimalText",
    "TimestampMixin",
    "UTCDateTime",
    "CURRENT_SCHEMA_VERSION",
    "ProductRecord",
]
