"""Database models.

Importing this package registers every table on BaseModel.metadata
(used by Database.create_all and Alembic autogenerate).
"""

from account_core.infrastructure.persistence.models.token import TokenModel
from account_core.infrastructure.persistence.models.user import UserModel
from account_core.infrastructure.persistence.models.verification_code import (
    VerificationCodeModel,
)

__all__ = [
    "TokenModel",
    "UserModel",
    "VerificationCodeModel",
]
