"""Validators package exports."""

from account_core.domain.validators.functions import (
    normalize_email,
    validate_display_name,
    validate_email,
    validate_strong_password,
    validate_token_family,
)

__all__ = [
    "normalize_email",
    "validate_display_name",
    "validate_email",
    "validate_strong_password",
    "validate_token_family",
]
