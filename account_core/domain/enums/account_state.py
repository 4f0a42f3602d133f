"""Account lifecycle states.

Usage:
    from account_core.domain.enums import AccountState

    if user.state == AccountState.BLOCKED:
        ...
"""

from enum import Enum


class AccountState(str, Enum):
    """Lifecycle state of a user account.

    Transitions are owned by AccountStateMachine:
        UNVERIFIED -> VERIFIED   (signup verification code consumed)
        any        -> BLOCKED    (administrative action)
        BLOCKED    -> UNVERIFIED | VERIFIED   (administrative unblock)
    """

    UNVERIFIED = "unverified"
    """Signed up, email address not yet confirmed."""

    VERIFIED = "verified"
    """Email address confirmed through a signup verification code."""

    BLOCKED = "blocked"
    """Administratively blocked. Refused by every self-service operation."""
