"""AccountStore protocol: one unit of work over the three repositories.

A store factory opens a unit of work as an async context manager. Writes
become durable only when commit() is called; leaving the context without a
commit (or with an exception) rolls everything back.

Usage:
    async with store_factory() as store:
        user = await store.users.find_by_id(user_id)
        ...
        await store.commit()
"""

from collections.abc import Callable
from contextlib import AbstractAsyncContextManager
from typing import Protocol

from account_core.domain.protocols.token_repository import TokenRepository
from account_core.domain.protocols.user_repository import UserRepository
from account_core.domain.protocols.verification_code_repository import (
    VerificationCodeRepository,
)


class AccountStore(Protocol):
    """Unit of work exposing users, codes and tokens."""

    users: UserRepository
    codes: VerificationCodeRepository
    tokens: TokenRepository

    async def commit(self) -> None:
        """Make every write of this unit of work durable."""
        ...

    async def rollback(self) -> None:
        """Discard every write of this unit of work."""
        ...


AccountStoreFactory = Callable[[], AbstractAsyncContextManager[AccountStore]]
"""Opens a new unit of work."""
