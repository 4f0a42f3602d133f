"""Domain errors package.

Usage:
    from account_core.domain.errors import duplicate_email, StoreConflict
"""

from account_core.domain.errors.account_error import (
    AccountError,
    account_blocked,
    bad_credentials,
    duplicate_email,
    invalid_or_expired_code,
    invalid_token,
    not_verified,
    user_not_found,
    validation_failed,
    weak_password,
)
from account_core.domain.errors.store_errors import (
    DuplicateRecordError,
    StaleRecordError,
    StoreConflict,
)

__all__ = [
    "AccountError",
    "account_blocked",
    "bad_credentials",
    "duplicate_email",
    "invalid_or_expired_code",
    "invalid_token",
    "not_verified",
    "user_not_found",
    "validation_failed",
    "weak_password",
    "StoreConflict",
    "DuplicateRecordError",
    "StaleRecordError",
]
