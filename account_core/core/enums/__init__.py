"""Core enums package."""

from account_core.core.enums.environment import Environment
from account_core.core.enums.error_code import ErrorCode

__all__ = [
    "Environment",
    "ErrorCode",
]
