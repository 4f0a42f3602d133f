"""User roles.

Roles are stored as a set on the user. Only ADMIN actors may change the
roles or the state of an account through update_user.

Usage:
    from account_core.domain.enums import UserRole

    if UserRole.ADMIN in actor.roles:
        ...
"""

from enum import Enum


class UserRole(str, Enum):
    """User roles.

    String Enum:
        Inherits from str for easy serialization into the roles column.
    """

    ADMIN = "admin"
    """Administrator. May block, unblock and grant roles."""

    USER = "user"
    """Standard self-service user. Granted at signup."""
