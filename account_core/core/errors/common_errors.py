"""Common error classes used across the account core.

Error Types:
- ValidationError: Input validation failures (weak password, bad field)
- NotFoundError: User not found
- ConflictError: Uniqueness conflicts (duplicate email)
- AuthenticationError: Bad credentials, invalid codes or tokens
- AuthorizationError: State-gated or role-gated refusals

Usage:
    from account_core.core.errors import ConflictError
    from account_core.core.enums import ErrorCode
    from account_core.core.result import Failure

    return Failure(error=ConflictError(
        code=ErrorCode.EMAIL_ALREADY_EXISTS,
        message="Email already registered",
        resource_type="User",
        conflicting_field="email",
    ))
"""

from dataclasses import dataclass

from account_core.core.errors.domain_error import DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class ValidationError(DomainError):
    """Input validation failure.

    Attributes:
        field: Field name that failed validation.
    """

    field: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class NotFoundError(DomainError):
    """Resource not found.

    Attributes:
        resource_type: Type of resource (User).
        resource_id: Identifier that was looked up.
    """

    resource_type: str
    resource_id: str


@dataclass(frozen=True, slots=True, kw_only=True)
class ConflictError(DomainError):
    """Uniqueness conflict.

    Attributes:
        resource_type: Type of resource in conflict.
        conflicting_field: Field that has conflict (email).
    """

    resource_type: str
    conflicting_field: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class AuthenticationError(DomainError):
    """Authentication failure (bad credentials, unusable code or token)."""

    pass


@dataclass(frozen=True, slots=True, kw_only=True)
class AuthorizationError(DomainError):
    """Operation refused for the account's state or the actor's roles.

    Attributes:
        required_state: Account state the operation needs, if state-gated.
    """

    required_state: str | None = None
