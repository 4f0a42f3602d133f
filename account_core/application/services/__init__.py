"""Application services."""

from account_core.application.services.account_service import AccountService
from account_core.application.services.code_generator import CodeGenerator, CodePolicy
from account_core.application.services.token_issuer import TokenIssuer

__all__ = [
    "AccountService",
    "CodeGenerator",
    "CodePolicy",
    "TokenIssuer",
]
