"""Database utilities - engine and session factory."""

from src.ems.core.db.engine import create_engine
from src.ems.core.db.session import SessionFactory, create_session_factory

__all__ = [
    "SessionFactory",
    "create_engine",
    "create_session_factory",
]
