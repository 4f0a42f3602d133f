"""User domain entity.

Pure business logic, no framework dependencies.

The entity is a concrete record. The capabilities the rest of the system
relies on (identity lookup, client-safe projection) are expressed by the
small protocols in `account_core.domain.protocols.user_capabilities`, not by a
base class.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any
from uuid import UUID

from account_core.domain.enums import AccountState, UserRole


@dataclass
class User:
    """User account with its lifecycle state.

    Business Rules:
        - email is unique and stored normalized (trimmed, lower-case)
        - pending_email is set only while an email change awaits confirmation
        - state changes go through AccountStateMachine
        - version increments on every persisted update (optimistic locking)

    Attributes:
        id: Unique user identifier (UUIDv7).
        email: Normalized email address.
        password_hash: Bcrypt hash (never plaintext, never projected).
        state: Lifecycle state.
        roles: Roles held by the user.
        pending_email: Address awaiting confirmation, if any.
        display_name: Optional profile name.
        version: Optimistic concurrency counter.
        created_at: Timestamp when user was created.
        updated_at: Timestamp when user was last updated.

    Example:
        >>> user = User(
        ...     id=uuid7(),
        ...     email="user@example.com",
        ...     password_hash="$2b$12$...",
        ...     state=AccountState.UNVERIFIED,
        ...     created_at=datetime.now(UTC),
        ...     updated_at=datetime.now(UTC),
        ... )
        >>> user.is_verified()
        False
    """

    id: UUID
    email: str
    password_hash: str
    state: AccountState
    created_at: datetime
    updated_at: datetime
    roles: set[UserRole] = field(default_factory=lambda: {UserRole.USER})
    pending_email: str | None = None
    display_name: str | None = None
    version: int = 1

    def is_verified(self) -> bool:
        """True if the email address has been confirmed."""
        return self.state == AccountState.VERIFIED

    def is_blocked(self) -> bool:
        """True if the account is administratively blocked."""
        return self.state == AccountState.BLOCKED

    def is_admin(self) -> bool:
        """True if the user holds the admin role."""
        return UserRole.ADMIN in self.roles

    def to_public(self) -> dict[str, Any]:
        """Client-safe projection of the user.

        Never includes password_hash or version.

        Returns:
            dict: Fields a client may see.
        """
        return {
            "id": self.id,
            "email": self.email,
            "state": self.state,
            "roles": sorted(role.value for role in self.roles),
            "pending_email": self.pending_email,
            "display_name": self.display_name,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }
