"""Centralized constants for internal implementation details.

These are NOT environment-specific configuration. For tunables (code
lifetimes, bcrypt rounds, delivery timeout) use `account_core/core/config.py`.
"""

# =============================================================================
# Token and Code Lengths
# =============================================================================

CODE_BYTES: int = 32
"""Random bytes per verification code (256 bits, URL-safe base64 encoded)."""

TOKEN_BYTES: int = 32
"""Random bytes per bearer token (256 bits, URL-safe base64 encoded)."""

TOKEN_DIGEST_LENGTH: int = 64
"""Length of the hex SHA-256 digest stored in place of a token value."""

BCRYPT_ROUNDS_DEFAULT: int = 12
"""Default bcrypt work factor (cost parameter)."""


# =============================================================================
# Logging
# =============================================================================

SECRET_PREVIEW_LENGTH: int = 8
"""Characters of a code or token that may appear in logs."""


# =============================================================================
# Field Limits
# =============================================================================

EMAIL_MAX_LENGTH: int = 255
DISPLAY_NAME_MAX_LENGTH: int = 100
TOKEN_FAMILY_MAX_LENGTH: int = 100
