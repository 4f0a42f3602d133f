"""In-memory persistence adapters."""

from account_core.infrastructure.persistence.memory.memory_store import (
    InMemoryAccountStore,
    InMemoryDatabase,
)

__all__ = [
    "InMemoryAccountStore",
    "InMemoryDatabase",
]
