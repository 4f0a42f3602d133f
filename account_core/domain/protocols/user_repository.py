"""UserRepository protocol for user persistence.

Port (interface) for hexagonal architecture.
Infrastructure layer implements this protocol.
"""

from typing import Protocol
from uuid import UUID

from account_core.domain.entities import User


class UserRepository(Protocol):
    """User repository protocol (port).

    This is a Protocol (not ABC) for structural typing.
    Implementations don't need to inherit from this.

    Methods:
        find_by_id: Retrieve user by ID
        find_by_email: Retrieve user by primary email
        find_by_pending_email: Retrieve user holding an address as pending
        save: Create new user
        update: Update existing user with version check
    """

    async def find_by_id(self, user_id: UUID) -> User | None:
        """Find user by ID.

        Returns:
            User if found, None otherwise.
        """
        ...

    async def find_by_email(self, email: str) -> User | None:
        """Find user by primary email address (already normalized)."""
        ...

    async def find_by_pending_email(self, email: str) -> User | None:
        """Find user whose pending email equals email."""
        ...

    async def save(self, user: User) -> None:
        """Create new user.

        Raises:
            DuplicateRecordError: If email (field "email") or pending email
                (field "pending_email") is already taken.
        """
        ...

    async def update(self, user: User) -> None:
        """Persist changes to an existing user.

        The write succeeds only if the stored version still equals
        user.version; on success user.version is incremented.

        Raises:
            StaleRecordError: If the stored version differs.
            DuplicateRecordError: If a unique field collides.
        """
        ...
