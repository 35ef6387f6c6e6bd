"""Infrastructure - Database and logging."""

from stockkeeper.infra.database import (
    create_engine,
    create_session_factory,
    dispose_engine,
    session_scope,
)
from stockkeeper.infra.logging import get_logger, setup_logging

__all__ = [
    "create_engine",
    "create_session_factory",
    "dispose_engine",
    "session_scope",
    "get_logger",
    "setup_logging",
]
