"""Input validators for account data.

Each validator returns the (possibly normalized) value or raises
ValueError. They back the Annotated types in account_core/domain/types.py,
and AccountService calls them directly on raw strings so a failure can be
turned into a WeakPassword or ValidationFailed result.
"""

import re
from collections.abc import Callable

from account_core.core.constants import TOKEN_FAMILY_MAX_LENGTH

PASSWORD_MIN_LENGTH = 8
PASSWORD_MAX_LENGTH = 128

_EMAIL_PATTERN = re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")
_FAMILY_PATTERN = re.compile(r"^[A-Za-z0-9._:-]+$")
_SPECIAL_CHARACTERS = frozenset('!@#$%^&*(),.?":{}|<>')

# (predicate over the password, message when the predicate is false)
_PASSWORD_RULES: tuple[tuple[Callable[[str], bool], str], ...] = (
    (
        lambda p: len(p) >= PASSWORD_MIN_LENGTH,
        f"Password must be at least {PASSWORD_MIN_LENGTH} characters",
    ),
    (
        lambda p: len(p) <= PASSWORD_MAX_LENGTH,
        f"Password must be at most {PASSWORD_MAX_LENGTH} characters",
    ),
    (lambda p: any(c.isupper() for c in p), "Password must contain uppercase letter"),
    (lambda p: any(c.islower() for c in p), "Password must contain lowercase letter"),
    (lambda p: any(c.isdigit() for c in p), "Password must contain digit"),
    (
        lambda p: not _SPECIAL_CHARACTERS.isdisjoint(p),
        "Password must contain special character",
    ),
)


def normalize_email(v: str) -> str:
    """Canonical lookup form of an address: trimmed and lower-cased.

    >>> normalize_email("  User@Example.COM ")
    'user@example.com'
    """
    return v.strip().lower()


def validate_email(v: str) -> str:
    """Check address syntax and return its canonical form.

    Raises:
        ValueError: If the trimmed address does not look like local@domain.tld.
    """
    if not _EMAIL_PATTERN.match(v.strip()):
        raise ValueError("Invalid email format")
    return normalize_email(v)


def validate_strong_password(v: str) -> str:
    """Enforce the password policy.

    8 to 128 characters with at least one upper-case letter, one lower-case
    letter, one digit and one special character. The first failing rule
    decides the message. The password is returned unchanged.
    """
    for check, message in _PASSWORD_RULES:
        if not check(v):
            raise ValueError(message)
    return v


def validate_display_name(v: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError("Display name cannot be blank")
    return v


def validate_token_family(v: str) -> str:
    """Token families name a client or device, e.g. ``ios:iphone-15``.

    Raises:
        ValueError: If empty, longer than the column allows, or using
            characters other than letters, digits and ``._:-``.
    """
    if not v:
        raise ValueError("Token family cannot be empty")
    if len(v) > TOKEN_FAMILY_MAX_LENGTH:
        raise ValueError(
            f"Token family must be at most {TOKEN_FAMILY_MAX_LENGTH} characters"
        )
    if _FAMILY_PATTERN.match(v) is None:
        raise ValueError("Token family contains invalid characters")
    return v
