"""Domain entities."""

from account_core.domain.entities.token import Token
from account_core.domain.entities.user import User
from account_core.domain.entities.verification_code import VerificationCode

__all__ = [
    "Token",
    "User",
    "VerificationCode",
]
