"""Centralized dependency injection container.

Application-scoped singletons built from Settings. The container is the
composition root: it alone decides which adapter backs each protocol.

Architecture:
    - @lru_cache() decorated factories (one instance per process)
    - Adapters are imported inside factories to keep import time low and
      avoid circular imports (adapter -> container -> adapter)

Usage:
    from account_core.core.container import get_account_service

    service = get_account_service()
    result = await service.signup("user@example.com", "SecurePass123!")
"""

from functools import lru_cache
from typing import TYPE_CHECKING

from account_core.core.config import get_settings

if TYPE_CHECKING:
    from account_core.application.services import AccountService
    from account_core.domain.protocols import (
        AccountStoreFactory,
        EmailDeliveryProtocol,
        EventBusProtocol,
        LoggerProtocol,
        PasswordHashingProtocol,
    )
    from account_core.infrastructure.persistence import Database, InMemoryDatabase


__all__ = [
    "get_account_service",
    "get_database",
    "get_email_service",
    "get_event_bus",
    "get_logger",
    "get_password_service",
    "get_settings",
    "get_store_factory",
]


@lru_cache()
def get_logger() -> "LoggerProtocol":
    """Get logger singleton (app-scoped).

    Human-readable console output in development, JSON lines elsewhere.

    Returns:
        Logger implementing LoggerProtocol.
    """
    from account_core.infrastructure.logging import ConsoleAdapter

    settings = get_settings()
    return ConsoleAdapter(
        use_json=not settings.is_development,
        level=settings.log_level,
    )


@lru_cache()
def get_password_service() -> "PasswordHashingProtocol":
    """Get password hashing service singleton (app-scoped).

    Cost factor comes from BCRYPT_ROUNDS.
    """
    from account_core.infrastructure.security import BcryptPasswordService

    return BcryptPasswordService(cost_factor=get_settings().bcrypt_rounds)


@lru_cache()
def get_email_service() -> "EmailDeliveryProtocol":
    """Get email delivery singleton (app-scoped).

    The stub adapter logs instead of sending. Hosts with a real mail
    transport pass their own adapter to DeliveryEventHandler.
    """
    from account_core.infrastructure.email import StubEmailService

    return StubEmailService(logger=get_logger())


@lru_cache()
def get_event_bus() -> "EventBusProtocol":
    """Get event bus singleton (app-scoped).

    Delivery handlers are subscribed here, once, for every code-bearing
    event (signup, resend, forgot password, change email).

    Returns:
        Event bus implementing EventBusProtocol.
    """
    from account_core.infrastructure.events import InMemoryEventBus
    from account_core.infrastructure.events.handlers import DeliveryEventHandler

    event_bus = InMemoryEventBus(logger=get_logger())
    DeliveryEventHandler(
        email_service=get_email_service(),
        logger=get_logger(),
        timeout_seconds=get_settings().delivery_timeout_seconds,
    ).register(event_bus)
    return event_bus


@lru_cache()
def get_database() -> "Database | InMemoryDatabase":
    """Get database singleton (app-scoped).

    DATABASE_URL selects SQLAlchemy (PostgreSQL via asyncpg, or any async
    dialect); without it the process-local in-memory store is used.
    """
    from account_core.infrastructure.persistence import Database, InMemoryDatabase

    settings = get_settings()
    if settings.database_url is None:
        return InMemoryDatabase()
    return Database(database_url=settings.database_url, echo=settings.db_echo)


def get_store_factory() -> "AccountStoreFactory":
    """Unit-of-work factory of the configured database."""
    return get_database().unit_of_work


@lru_cache()
def get_account_service() -> "AccountService":
    """Get AccountService singleton (app-scoped), fully wired."""
    from account_core.application.services import AccountService

    return AccountService(
        store_factory=get_store_factory(),
        password_service=get_password_service(),
        event_bus=get_event_bus(),
        logger=get_logger(),
        settings=get_settings(),
    )
