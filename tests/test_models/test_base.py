"""Tests for base model infrastructure."""

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest
from sqlalchemy.dialects import sqlite
from sqlalchemy.orm import DeclarativeBase

from stockkeeper.models.base import Base, DecimalText, TimestampMixin, UTCDateTime

DIALECT = sqlite.dialect()


def test_base_is_declarative_base():
    """Base should be a SQLAlchemy DeclarativeBase."""
    assert hasattr(Base, "metadata")
    assert issubclass(Base, DeclarativeBase)


def test_timestamp_mixin_has_created_at():
    """TimestampMixin should provide created_at column."""
    assert hasattr(TimestampMixin, "created_at")


def test_timestamp_mixin_has_updated_at():
    """TimestampMixin should provide updated_at column."""
    assert hasattr(TimestampMixin, "updated_at")


def test_utc_datetime_stores_naive_utc():
    """Aware datetimes are converted to naive UTC on the way in."""
    column_type = UTCDateTime()
    local = datetime(2024, 5, 1, 12, 30, tzinfo=timezone(timedelta(hours=2)))

    stored = column_type.process_bind_param(local, DIALECT)

    assert stored == datetime(2024, 5, 1, 10, 30)
    assert stored.tzinfo is None


def test_utc_datetime_returns_aware_utc():
    column_type = UTCDateTime()

    loaded = column_type.process_result_value(datetime(2024, 5, 1, 10, 30, 0, 123456), DIALECT)

    assert loaded.tzinfo is timezone.utc
    assert loaded.microsecond == 123456


def test_utc_datetime_rejects_naive_values():
    with pytest.raises(ValueError, match="Naive datetime"):
        UTCDateTime().process_bind_param(datetime(2024, 5, 1), DIALECT)


def test_decimal_text_round_trip_is_exact():
    column_type = DecimalText()

    stored = column_type.process_bind_param(Decimal("129.99"), DIALECT)
    loaded = column_type.process_result_value(stored, DIALECT)

    assert stored == "129.99"
    assert loaded == Decimal("129.99")


def test_decimal_text_passes_none_through():
    column_type = DecimalText()

    assert column_type.process_bind_param(None, DIALECT) is None
    assert column_type.process_result_value(None, DIALECT) is None


def test_decimal_text_rejects_corrupt_values():
    with pytest.raises(ValueError, match="corrupt"):
        DecimalText().process_result_value("twelve", DIALECT)
