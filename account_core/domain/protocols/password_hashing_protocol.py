"""Credential vault protocol.

Architecture:
    - Domain defines protocol (port)
    - Infrastructure implements adapter (BcryptPasswordService)
"""

from typing import Protocol


class PasswordHashingProtocol(Protocol):
    """Password hashing and verification interface.

    Usage:
        password_hash = vault.hash_password("SecurePass123!")
        vault.verify_password("SecurePass123!", password_hash)  # True
    """

    def hash_password(self, password: str) -> str:
        """Hash a plaintext password (random salt, one-way).

        Args:
            password: Plaintext password to hash.

        Returns:
            Hashed password string (bcrypt format: $2b$12$...).
        """
        ...

    def verify_password(self, password: str, password_hash: str) -> bool:
        """Verify a plaintext password against a hash.

        Returns:
            True if password matches hash. False otherwise, including for a
            malformed hash (never raises).
        """
        ...
