"""Account DTOs (Data Transfer Objects).

Request models are pydantic (validated at construction); result DTOs are
frozen dataclasses carried back to the transport layer.

DTOs:
    - SignupRequest: signup input
    - UpdateUserRequest: typed partial update (display_name, roles, state)
    - UserView: client-safe projection of a user
    - TokenDescriptor: newly created bearer token (plaintext shown once)
    - TokenSummary: existing token without its value
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from account_core.domain.entities import Token
from account_core.domain.enums import AccountState, UserRole
from account_core.domain.protocols import ClientProjectable
from account_core.domain.types import DisplayName, Email, Password


# =============================================================================
# Requests
# =============================================================================


class SignupRequest(BaseModel):
    """Signup input.

    Attributes:
        email: Address to register (validated, normalized).
        password: Plaintext password (strength validated, hashed by service).
        display_name: Optional profile name.
    """

    email: Email
    password: Password
    display_name: DisplayName | None = None

    model_config = ConfigDict(extra="forbid", frozen=True)


class UpdateUserRequest(BaseModel):
    """Typed partial update of a user.

    Only the fields listed here are mutable through update_user; anything
    else (email, password, pending_email) is rejected. A field left out is
    unchanged. display_name may be explicitly set to None to clear it.

    Protected fields (roles, state) may only be changed by an admin actor.

    Attributes:
        display_name: New profile name.
        roles: Full replacement role set.
        state: Target account state (administrative block/unblock).
        version: Version the client last read; mismatch is a lost update.
    """

    display_name: DisplayName | None = None
    roles: set[UserRole] | None = None
    state: AccountState | None = None
    version: int | None = Field(default=None, ge=1)

    model_config = ConfigDict(extra="forbid", frozen=True)

    @field_validator("roles")
    @classmethod
    def validate_roles(cls, v: set[UserRole] | None) -> set[UserRole] | None:
        """Every account keeps the base user role."""
        if v is not None and UserRole.USER not in v:
            raise ValueError("roles must include 'user'")
        return v

    def protected_fields(self) -> set[str]:
        """Protected fields this request actually sets."""
        return {
            name
            for name in ("roles", "state")
            if name in self.model_fields_set and getattr(self, name) is not None
        }

    def protected_changes(
        self, roles: set[UserRole], state: AccountState
    ) -> set[str]:
        """Protected fields whose requested value differs from the stored one.

        Echoing the current roles or state back (a full-object update) is
        not a change and needs no admin.
        """
        current = {"roles": set(roles), "state": state}
        return {
            name
            for name in self.protected_fields()
            if getattr(self, name) != current[name]
        }


# =============================================================================
# Results
# =============================================================================


@dataclass(frozen=True, kw_only=True)
class UserView:
    """Client-safe projection of a user (never the password hash).

    Attributes:
        id: User identifier.
        email: Primary address.
        state: Account state.
        roles: Sorted role names.
        pending_email: Address awaiting confirmation, if any.
        display_name: Profile name.
        created_at: Creation timestamp.
        updated_at: Last update timestamp.
    """

    id: UUID
    email: str
    state: AccountState
    roles: tuple[str, ...]
    pending_email: str | None
    display_name: str | None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, user: ClientProjectable) -> "UserView":
        public = user.to_public()
        return cls(
            id=public["id"],
            email=public["email"],
            state=public["state"],
            roles=tuple(public["roles"]),
            pending_email=public["pending_email"],
            display_name=public["display_name"],
            created_at=public["created_at"],
            updated_at=public["updated_at"],
        )

    def to_dict(self) -> dict[str, Any]:
        """JSON-friendly representation."""
        return {
            "id": str(self.id),
            "email": self.email,
            "state": self.state.value,
            "roles": list(self.roles),
            "pending_email": self.pending_email,
            "display_name": self.display_name,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }


@dataclass(frozen=True, kw_only=True)
class TokenDescriptor:
    """Newly created bearer token.

    The plaintext token exists only here; the store keeps its digest.
    """

    token: str = field(repr=False)
    token_id: UUID
    family: str
    issued_at: datetime
    expires_at: datetime | None

    def to_dict(self) -> dict[str, Any]:
        """Token-descriptor map handed to the transport layer."""
        return {
            "token": self.token,
            "token_id": str(self.token_id),
            "family": self.family,
            "issued_at": self.issued_at.isoformat(),
            "expires_at": self.expires_at.isoformat() if self.expires_at else None,
        }


@dataclass(frozen=True, kw_only=True)
class TokenSummary:
    """Existing token, listed without its value."""

    token_id: UUID
    family: str
    issued_at: datetime
    expires_at: datetime | None

    @classmethod
    def from_entity(cls, token: Token) -> "TokenSummary":
        return cls(
            token_id=token.id,
            family=token.family,
            issued_at=token.issued_at,
            expires_at=token.expires_at,
        )
