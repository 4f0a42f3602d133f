"""Security adapters."""

from account_core.infrastructure.security.bcrypt_password_service import (
    BcryptPasswordService,
)

__all__ = ["BcryptPasswordService"]
