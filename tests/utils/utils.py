"""Utility functions for testing.

Random test data plus short account flows shared by service tests.
"""

import random
import string
from uuid import UUID

from account_core.application.dtos import UserView
from account_core.application.services import AccountService
from account_core.core.result import Success
from account_core.domain.enums import UserRole
from account_core.domain.events import UserSignedUp

STRONG_PASSWORD = "SecurePass123!"


def random_lower_string(length: int = 32) -> str:
    """Generate a random lowercase string."""
    return "".join(random.choices(string.ascii_lowercase, k=length))


def random_email() -> str:
    """Generate a random email address in format: random@example.com."""
    return f"{random_lower_string(10)}@example.com"


def last_code(event_bus, event_type) -> str:
    """Code carried by the most recent event of event_type."""
    return event_bus.of_type(event_type)[-1].code


async def signup(
    service: AccountService,
    email: str | None = None,
    password: str = STRONG_PASSWORD,
) -> UserView:
    """Sign up and return the view; fails the test on Failure."""
    result = await service.signup(email or random_email(), password)
    assert isinstance(result, Success), result
    return result.value


async def signup_verified(
    service: AccountService,
    event_bus,
    email: str | None = None,
    password: str = STRONG_PASSWORD,
) -> UserView:
    """Sign up and verify through the delivered signup code."""
    await signup(service, email, password)
    result = await service.verify_user(last_code(event_bus, UserSignedUp))
    assert isinstance(result, Success), result
    return result.value


async def make_admin(memory_database, user_id: UUID) -> None:
    """Grant the admin role directly in the store (bootstrap)."""
    async with memory_database.unit_of_work() as store:
        user = await store.users.find_by_id(user_id)
        user.roles = {UserRole.USER, UserRole.ADMIN}
        await store.users.update(user)
        await store.commit()
