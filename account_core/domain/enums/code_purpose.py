"""Verification code purposes."""

from enum import Enum


class CodePurpose(str, Enum):
    """What a verification code authorizes.

    Each purpose has its own lifetime (see Settings) and at most one active
    code per user.
    """

    SIGNUP_VERIFICATION = "signup_verification"
    FORGOT_PASSWORD = "forgot_password"
    CHANGE_EMAIL = "change_email"
