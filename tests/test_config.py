"""Tests for application settings."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from stockkeeper.config import Settings, get_settings


def test_defaults():
    settings = Settings(_env_file=None)

    assert settings.db_filename == "inventory.db"
    assert settings.seed_sample_data is True
    assert settings.default_low_stock_threshold == 10
    assert settings.database_path == Path("./data") / "inventory.db"


def test_database_url_uses_aiosqlite(tmp_path: Path):
    settings = Settings(data_dir=tmp_path, db_filename="shop.db")

    assert settings.database_url == f"sqlite+aiosqlite:///{tmp_path / 'shop.db'}"


def test_reads_prefixed_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
    monkeypatch.setenv("STOCKKEEPER_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("STOCKKEEPER_SEED_SAMPLE_DATA", "false")
    monkeypatch.setenv("STOCKKEEPER_LOG_LEVEL", "DEBUG")

    settings = Settings(_env_file=None)

    assert settings.data_dir == tmp_path
    assert settings.seed_sample_data is False
    assert settings.log_level == "DEBUG"


def test_negative_threshold_rejected():
    with pytest.raises(ValidationError):
        Settings(default_low_stock_threshold=-1)


def test_get_settings_is_cached():
    assert get_settings() is get_settings()
