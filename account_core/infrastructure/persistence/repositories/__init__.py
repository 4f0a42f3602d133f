"""SQLAlchemy repository adapters."""

from account_core.infrastructure.persistence.repositories.token_repository import (
    TokenRepository,
)
from account_core.infrastructure.persistence.repositories.user_repository import (
    UserRepository,
)
from account_core.infrastructure.persistence.repositories.verification_code_repository import (
    VerificationCodeRepository,
)

__all__ = [
    "TokenRepository",
    "UserRepository",
    "VerificationCodeRepository",
]
