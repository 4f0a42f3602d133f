"""Account state machine.

Owns every change of User.state and the state gates in front of each
sensitive operation. Pure domain logic: no persistence, no clock.

Transitions:
    UNVERIFIED -> VERIFIED      signup code consumed (verify only)
    UNVERIFIED -> BLOCKED       administrative
    VERIFIED   -> BLOCKED       administrative
    BLOCKED    -> UNVERIFIED    administrative unblock
    BLOCKED    -> VERIFIED      administrative unblock
    VERIFIED   -> UNVERIFIED    never (no downgrade)

Gates:
    Recovery operations (forgot/reset password) stay open to unverified
    users so access can always be regained. Email change requires a verified
    address. Every self-service operation refuses blocked accounts.

Usage:
    from account_core.domain.account_state_machine import (
        AccountOperation,
        AccountStateMachine,
    )

    match AccountStateMachine.ensure_allowed(user, AccountOperation.ISSUE_TOKEN):
        case Failure(error=error):
            return Failure(error=error)
"""

from enum import Enum

from account_core.core.errors import DomainError
from account_core.core.result import Failure, Result, Success
from account_core.domain.entities import User
from account_core.domain.enums import AccountState
from account_core.domain.errors import (
    account_blocked,
    invalid_or_expired_code,
    not_verified,
    validation_failed,
)


class AccountOperation(str, Enum):
    """Sensitive operations gated by account state."""

    RESEND_VERIFICATION = "resend_verification"
    FORGOT_PASSWORD = "forgot_password"
    RESET_PASSWORD = "reset_password"
    CHANGE_PASSWORD = "change_password"
    REQUEST_EMAIL_CHANGE = "request_email_change"
    CONFIRM_EMAIL_CHANGE = "confirm_email_change"
    ISSUE_TOKEN = "issue_token"
    AUTHENTICATE = "authenticate"


_ALLOWED_TRANSITIONS: dict[AccountState, frozenset[AccountState]] = {
    # UNVERIFIED -> VERIFIED only through verify()
    AccountState.UNVERIFIED: frozenset({AccountState.BLOCKED}),
    AccountState.VERIFIED: frozenset({AccountState.BLOCKED}),
    AccountState.BLOCKED: frozenset({AccountState.UNVERIFIED, AccountState.VERIFIED}),
}

# Operations that additionally need a verified address
_REQUIRES_VERIFIED: frozenset[AccountOperation] = frozenset(
    {
        AccountOperation.REQUEST_EMAIL_CHANGE,
        AccountOperation.CONFIRM_EMAIL_CHANGE,
    }
)


class AccountStateMachine:
    """Legal transitions and operation gates for user accounts.

    All methods are static; the machine holds no state of its own.
    """

    @staticmethod
    def can_transition(current: AccountState, target: AccountState) -> bool:
        """Check whether current -> target is a legal transition.

        Staying in the same state is always legal.
        """
        if current == target:
            return True
        return target in _ALLOWED_TRANSITIONS[current]

    @staticmethod
    def transition(user: User, target: AccountState) -> Result[None, DomainError]:
        """Move user to target state if the transition is legal.

        Args:
            user: User to update in place.
            target: Desired state.

        Returns:
            Success(None) with user.state updated, or
            Failure(ValidationFailed) for an illegal transition.
        """
        if not AccountStateMachine.can_transition(user.state, target):
            return Failure(
                error=validation_failed(
                    f"Cannot change state from {user.state.value} to {target.value}",
                    field="state",
                )
            )
        user.state = target
        return Success(value=None)

    @staticmethod
    def verify(user: User) -> Result[None, DomainError]:
        """Apply UNVERIFIED -> VERIFIED after a signup code was accepted.

        A code whose subject is no longer unverified is reported as an invalid
        code, never as a distinct state error.
        """
        if user.state == AccountState.BLOCKED:
            return Failure(error=account_blocked())
        if user.state != AccountState.UNVERIFIED:
            return Failure(error=invalid_or_expired_code())
        user.state = AccountState.VERIFIED
        return Success(value=None)

    @staticmethod
    def block(user: User) -> None:
        """Administrative block. Legal from any state."""
        user.state = AccountState.BLOCKED

    @staticmethod
    def ensure_allowed(
        user: User,
        operation: AccountOperation,
    ) -> Result[None, DomainError]:
        """Check the state gate for an operation.

        Returns:
            Success(None) if allowed, Failure(AccountBlocked) for blocked
            accounts, Failure(NotVerified) when the operation needs a
            verified address.
        """
        if user.state == AccountState.BLOCKED:
            return Failure(error=account_blocked())
        if operation in _REQUIRES_VERIFIED and user.state != AccountState.VERIFIED:
            return Failure(error=not_verified())
        return Success(value=None)

    @staticmethod
    def needs_verification(user: User) -> bool:
        """True if a signup verification mail still makes sense."""
        return user.state == AccountState.UNVERIFIED
