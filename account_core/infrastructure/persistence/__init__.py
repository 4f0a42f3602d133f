"""Persistence adapters: SQLAlchemy (PostgreSQL, SQLite) and in-memory."""

from account_core.infrastructure.persistence.database import Database
from account_core.infrastructure.persistence.memory import InMemoryDatabase
from account_core.infrastructure.persistence.sqlalchemy_store import (
    SqlAlchemyAccountStore,
)

__all__ = [
    "Database",
    "InMemoryDatabase",
    "SqlAlchemyAccountStore",
]
