"""Account lifecycle domain events.

Code-bearing events (UserSignedUp, VerificationMailResent,
PasswordResetRequested, EmailChangeRequested) are consumed by
DeliveryEventHandler, which sends the code by email. Codes are excluded
from repr so an event never leaks its code into logs.
"""

from dataclasses import dataclass, field
from uuid import UUID

from account_core.domain.events.base_event import DomainEvent


@dataclass(frozen=True, kw_only=True)
class UserSignedUp(DomainEvent):
    """New account created in UNVERIFIED state.

    Triggers:
    - DeliveryEventHandler: send verification mail

    Attributes:
        user_id: New user.
        email: Normalized address.
        code: Signup verification code (for delivery).
    """

    user_id: UUID
    email: str
    code: str = field(repr=False)


@dataclass(frozen=True, kw_only=True)
class VerificationMailResent(DomainEvent):
    """Signup verification code re-issued."""

    user_id: UUID
    email: str
    code: str = field(repr=False)


@dataclass(frozen=True, kw_only=True)
class UserVerified(DomainEvent):
    """Account moved UNVERIFIED -> VERIFIED."""

    user_id: UUID
    email: str


@dataclass(frozen=True, kw_only=True)
class PasswordResetRequested(DomainEvent):
    """Forgot-password code issued for a registered address.

    Never published for unknown or blocked addresses.
    """

    user_id: UUID
    email: str
    code: str = field(repr=False)


@dataclass(frozen=True, kw_only=True)
class PasswordResetCompleted(DomainEvent):
    """Password replaced through a forgot-password code.

    Attributes:
        user_id: User whose password changed.
        revoked_tokens: Number of tokens revoked by the reset.
    """

    user_id: UUID
    revoked_tokens: int


@dataclass(frozen=True, kw_only=True)
class PasswordChanged(DomainEvent):
    """Password replaced by the user (old password supplied)."""

    user_id: UUID


@dataclass(frozen=True, kw_only=True)
class EmailChangeRequested(DomainEvent):
    """Change-email code issued; new address stored as pending.

    Triggers:
    - DeliveryEventHandler: send the code to the NEW address
    """

    user_id: UUID
    new_email: str
    code: str = field(repr=False)


@dataclass(frozen=True, kw_only=True)
class EmailChanged(DomainEvent):
    """Pending address confirmed and promoted to primary."""

    user_id: UUID
    old_email: str
    new_email: str


@dataclass(frozen=True, kw_only=True)
class EmailChangeCancelled(DomainEvent):
    """Owner withdrew a pending address before confirming it."""

    user_id: UUID
    pending_email: str


@dataclass(frozen=True, kw_only=True)
class TokenCreated(DomainEvent):
    """Bearer token issued."""

    user_id: UUID
    token_id: UUID
    family: str


@dataclass(frozen=True, kw_only=True)
class TokenRemoved(DomainEvent):
    """One token, or a whole family, revoked on request.

    Attributes:
        user_id: Token owner.
        family: Family of the revoked token(s).
        revoked_count: Tokens actually revoked (0 when already revoked).
    """

    user_id: UUID
    family: str
    revoked_count: int


@dataclass(frozen=True, kw_only=True)
class UserUpdated(DomainEvent):
    """Profile, roles or state changed through update_user.

    Attributes:
        user_id: Updated user.
        actor_id: User who made the change.
        changed_fields: Names of fields that actually changed.
    """

    user_id: UUID
    actor_id: UUID
    changed_fields: tuple[str, ...]
