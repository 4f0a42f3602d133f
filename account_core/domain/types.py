"""Annotated types with centralized validation.

Define validation once, use in every request model.
"""

from typing import Annotated

from pydantic import AfterValidator, Field

from account_core.core.constants import (
    DISPLAY_NAME_MAX_LENGTH,
    EMAIL_MAX_LENGTH,
    TOKEN_FAMILY_MAX_LENGTH,
)
from account_core.domain.validators import (
    validate_display_name,
    validate_email,
    validate_strong_password,
    validate_token_family,
)

Email = Annotated[
    str,
    Field(
        min_length=5,
        max_length=EMAIL_MAX_LENGTH,
        description="Email address",
        examples=["user@example.com"],
    ),
    AfterValidator(validate_email),
]
"""Email address, validated and normalized (trimmed, lowercase).

Examples:
    >>> class SignupRequest(BaseModel):
    ...     email: Email
    >>> SignupRequest(email="User@Example.COM").email
    'user@example.com'
"""

Password = Annotated[
    str,
    Field(
        description="Password with strength requirements",
        examples=["SecurePass123!"],
    ),
    AfterValidator(validate_strong_password),
]
"""Password with strength validation (8-128 chars, upper, lower, digit, special)."""

DisplayName = Annotated[
    str,
    Field(max_length=DISPLAY_NAME_MAX_LENGTH, description="Profile display name"),
    AfterValidator(validate_display_name),
]

TokenFamily = Annotated[
    str,
    Field(
        max_length=TOKEN_FAMILY_MAX_LENGTH,
        description="Client/device grouping key for bearer tokens",
        examples=["default", "iphone-15"],
    ),
    AfterValidator(validate_token_family),
]
