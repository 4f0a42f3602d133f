"""Application DTOs."""

from account_core.application.dtos.account_dtos import (
    SignupRequest,
    TokenDescriptor,
    TokenSummary,
    UpdateUserRequest,
    UserView,
)

__all__ = [
    "SignupRequest",
    "TokenDescriptor",
    "TokenSummary",
    "UpdateUserRequest",
    "UserView",
]
