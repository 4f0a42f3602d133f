"""Domain enums for account business logic.

Available Enums:
    - AccountState: Unverified, Verified, Blocked
    - CodePurpose: What a verification code authorizes
    - UserRole: Roles held by a user
"""

from account_core.domain.enums.account_state import AccountState
from account_core.domain.enums.code_purpose import CodePurpose
from account_core.domain.enums.user_role import UserRole

__all__ = [
    "AccountState",
    "CodePurpose",
    "UserRole",
]
