"""Domain events."""

from account_core.domain.events.account_events import (
    EmailChangeCancelled,
    EmailChanged,
    EmailChangeRequested,
    PasswordChanged,
    PasswordResetCompleted,
    PasswordResetRequested,
    TokenCreated,
    TokenRemoved,
    UserSignedUp,
    UserUpdated,
    UserVerified,
    VerificationMailResent,
)
from account_core.domain.events.base_event import DomainEvent

__all__ = [
    "DomainEvent",
    "EmailChangeCancelled",
    "EmailChanged",
    "EmailChangeRequested",
    "PasswordChanged",
    "PasswordResetCompleted",
    "PasswordResetRequested",
    "TokenCreated",
    "TokenRemoved",
    "UserSignedUp",
    "UserUpdated",
    "UserVerified",
    "VerificationMailResent",
]
