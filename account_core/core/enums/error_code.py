"""Domain-level error codes (machine-readable).

Error codes follow ENTITY_ACTION_REASON naming convention and are the only
part of an error the transport layer should branch on.

Categories:
- Validation errors (PASSWORD_TOO_WEAK, VALIDATION_FAILED)
- Resource errors (*_NOT_FOUND)
- Conflict errors (*_ALREADY_EXISTS)
- Authentication errors (INVALID_CREDENTIALS, TOKEN_*, *_CODE)
- Account state errors (EMAIL_NOT_VERIFIED, ACCOUNT_BLOCKED)
"""

from enum import Enum


class ErrorCode(Enum):
    """Domain-level error codes (machine-readable)."""

    # Validation errors
    INVALID_EMAIL = "invalid_email"
    PASSWORD_TOO_WEAK = "password_too_weak"
    VALIDATION_FAILED = "validation_failed"

    # Resource errors
    USER_NOT_FOUND = "user_not_found"

    # Conflict errors
    EMAIL_ALREADY_EXISTS = "email_already_exists"

    # Authentication errors
    INVALID_CREDENTIALS = "invalid_credentials"
    INVALID_OR_EXPIRED_CODE = "invalid_or_expired_code"
    TOKEN_INVALID = "token_invalid"

    # Account state errors
    EMAIL_NOT_VERIFIED = "email_not_verified"
    ACCOUNT_BLOCKED = "account_blocked"
    PERMISSION_DENIED = "permission_denied"
