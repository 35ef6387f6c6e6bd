"""Application configuration using Pydantic Settings.

Reads configuration from environment variables (prefixed ``STOCKKEEPER_``)
and an optional ``.env`` file, with sensible defaults for a local install.
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="STOCKKEEPER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # =========================================================================
    # Application
    # =========================================================================
    environment: Literal["prod", "dev", "test"] = Field(
        default="dev",
        description="Environment name",
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode (echoes SQL)",
    )

    # =========================================================================
    # Storage (local SQLite file)
    # =========================================================================
    data_dir: Path = Field(
        default=Path("./data"),
        description="Directory holding the inventory database file",
    )
    db_filename: str = Field(
        default="inventory.db",
        min_length=1,
        description="SQLite database file name",
    )
    db_timeout: float = Field(
        default=5.0,
        gt=0,
        description="Seconds SQLite waits on a locked database file",
    )

    @computed_field  # type: ignore[prop-decorator]
    @property
    def database_path(self) -> Path:
        """Absolute-or-relative path of the SQLite file."""
        return self.data_dir / self.db_filename

    @computed_field  # type: ignore[prop-decorator]
    @property
    def database_url(self) -> str:
        """SQLAlchemy async URL for the inventory database."""
        return f"sqlite+aiosqlite:///{self.database_path}"

    # =========================================================================
    # Inventory
    # =========================================================================
    seed_sample_data: bool = Field(
        default=True,
        description="Populate an empty collection with sample products",
    )
    default_low_stock_threshold: int = Field(
        default=10,
        ge=0,
        description="Threshold used when a product does not specify one",
    )

    # =========================================================================
    # Logging
    # =========================================================================
    log_level: str = Field(
        default="INFO",
        description="Log level (DEBUG, INFO, WARNING, ERROR)",
    )
    log_json: bool = Field(
        default=False,
        description="Output logs as JSON instead of the console renderer",
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
