"""Account domain errors.

Message constants plus small factories that build the DomainError values
every account use-case returns inside Failure.

Architecture:
    - Domain layer errors (no infrastructure dependencies)
    - Used in Result types (railway-oriented programming)
    - Never raised as exceptions (return Failure(error) instead)

Usage:
    from account_core.domain.errors import invalid_or_expired_code
    from account_core.core.result import Failure

    if code is None:
        return Failure(error=invalid_or_expired_code())
"""

from account_core.core.enums import ErrorCode
from account_core.core.errors import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from account_core.domain.enums import AccountState


class AccountError:
    """Account error message constants.

    Error Categories:
        - Conflict: DUPLICATE_EMAIL
        - Code/token: INVALID_OR_EXPIRED_CODE, INVALID_TOKEN
        - Credentials: BAD_CREDENTIALS, WEAK_PASSWORD
        - State: NOT_VERIFIED, ACCOUNT_BLOCKED
        - Other: VALIDATION_FAILED, USER_NOT_FOUND
    """

    DUPLICATE_EMAIL = "Email already registered"
    INVALID_OR_EXPIRED_CODE = "Invalid or expired code"
    """Same message for unknown, consumed, superseded and expired codes."""

    INVALID_TOKEN = "Invalid token"
    BAD_CREDENTIALS = "Invalid credentials"
    WEAK_PASSWORD = "Password does not meet strength requirements"
    NOT_VERIFIED = "Email address must be verified first"
    ACCOUNT_BLOCKED = "Account is blocked"
    VALIDATION_FAILED = "Validation failed"
    USER_NOT_FOUND = "User not found"
    CONCURRENT_UPDATE = "User was modified concurrently, reload and retry"


def duplicate_email() -> ConflictError:
    """Email (or pending email) is already taken."""
    return ConflictError(
        code=ErrorCode.EMAIL_ALREADY_EXISTS,
        message=AccountError.DUPLICATE_EMAIL,
        resource_type="User",
        conflicting_field="email",
    )


def invalid_or_expired_code() -> AuthenticationError:
    """Code is unknown, consumed, superseded, expired or for another purpose."""
    return AuthenticationError(
        code=ErrorCode.INVALID_OR_EXPIRED_CODE,
        message=AccountError.INVALID_OR_EXPIRED_CODE,
    )


def invalid_token() -> AuthenticationError:
    return AuthenticationError(
        code=ErrorCode.TOKEN_INVALID,
        message=AccountError.INVALID_TOKEN,
    )


def bad_credentials() -> AuthenticationError:
    return AuthenticationError(
        code=ErrorCode.INVALID_CREDENTIALS,
        message=AccountError.BAD_CREDENTIALS,
    )


def weak_password(reason: str | None = None) -> ValidationError:
    """Password failed the strength policy.

    Args:
        reason: Which rule failed (kept in details, not in the message).
    """
    return ValidationError(
        code=ErrorCode.PASSWORD_TOO_WEAK,
        message=AccountError.WEAK_PASSWORD,
        field="password",
        details={"reason": reason} if reason else None,
    )


def not_verified() -> AuthorizationError:
    return AuthorizationError(
        code=ErrorCode.EMAIL_NOT_VERIFIED,
        message=AccountError.NOT_VERIFIED,
        required_state=AccountState.VERIFIED.value,
    )


def account_blocked() -> AuthorizationError:
    return AuthorizationError(
        code=ErrorCode.ACCOUNT_BLOCKED,
        message=AccountError.ACCOUNT_BLOCKED,
    )


def validation_failed(
    message: str = AccountError.VALIDATION_FAILED,
    field: str | None = None,
) -> ValidationError:
    """Request violates a field rule or lost an optimistic-lock race."""
    return ValidationError(
        code=ErrorCode.VALIDATION_FAILED,
        message=message,
        field=field,
    )


def user_not_found(user_id: object) -> NotFoundError:
    """Explicit lookup by id or email found nothing."""
    return NotFoundError(
        code=ErrorCode.USER_NOT_FOUND,
        message=AccountError.USER_NOT_FOUND,
        resource_type="User",
        resource_id=str(user_id),
    )
