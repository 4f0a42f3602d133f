"""Bcrypt credential vault (adapter).

Implements PasswordHashingProtocol. Work factor comes from
Settings.bcrypt_rounds (10-20, default 12 = ~250ms per hash).

bcrypt only reads the first 72 bytes of a password and current releases
reject longer input, so both hashing and verification truncate the UTF-8
encoding to 72 bytes.
"""

import bcrypt

from account_core.core.constants import BCRYPT_ROUNDS_DEFAULT

BCRYPT_MAX_PASSWORD_BYTES = 72


def _encode(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_PASSWORD_BYTES]


class BcryptPasswordService:
    """Bcrypt password hashing service.

    Usage:
        from account_core.core.container import get_password_service

        vault = get_password_service()
        password_hash = vault.hash_password("SecurePass123!")
        vault.verify_password("SecurePass123!", password_hash)  # True
    """

    def __init__(self, cost_factor: int = BCRYPT_ROUNDS_DEFAULT) -> None:
        """Initialize bcrypt password service.

        Args:
            cost_factor: Bcrypt cost factor. Logarithmic: each +1 doubles
                computation time (10 = ~60ms, 12 = ~250ms, 14 = ~1s).

        Raises:
            ValueError: If cost_factor is outside 10-20.
        """
        if cost_factor < 10:
            msg = "Cost factor must be at least 10 for security"
            raise ValueError(msg)
        if cost_factor > 20:
            msg = "Cost factor above 20 is impractically slow"
            raise ValueError(msg)
        self._cost_factor = cost_factor

    @property
    def cost_factor(self) -> int:
        return self._cost_factor

    def hash_password(self, password: str) -> str:
        """Hash a plaintext password.

        Returns:
            60-character hash ($2b$<cost>$<salt><hash>), new salt per call.
        """
        salt = bcrypt.gensalt(rounds=self._cost_factor)
        return bcrypt.hashpw(_encode(password), salt).decode("utf-8")

    def verify_password(self, password: str, password_hash: str) -> bool:
        """Verify a plaintext password against a bcrypt hash.

        Constant-time comparison. Returns False for a malformed hash instead
        of raising.
        """
        try:
            return bcrypt.checkpw(_encode(password), password_hash.encode("utf-8"))
        except (ValueError, AttributeError):
            return False
