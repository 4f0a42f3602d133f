"""TokenRepository protocol.

Tokens are looked up by the SHA-256 digest of their value (indexed, O(1))
and enumerated or revoked by user and family.
"""

from datetime import datetime
from typing import Protocol
from uuid import UUID

from account_core.domain.entities import Token


class TokenRepository(Protocol):
    """Token repository protocol (port).

    All revoke methods are idempotent: already revoked tokens are left
    untouched and not counted.
    """

    async def save(self, token: Token) -> None:
        """Insert a newly issued token."""
        ...

    async def find_by_digest(self, token_digest: str) -> Token | None:
        """Find token by value digest, whatever its status."""
        ...

    async def revoke(self, token_digest: str, now: datetime, reason: str) -> bool:
        """Revoke one token by digest.

        Returns:
            True if this call revoked it, False if missing or already revoked.
        """
        ...

    async def revoke_by_id(self, token_id: UUID, now: datetime, reason: str) -> bool:
        """Revoke one token by id. Same semantics as revoke()."""
        ...

    async def revoke_family(
        self,
        user_id: UUID,
        family: str,
        now: datetime,
        reason: str,
    ) -> int:
        """Revoke every active token of user_id in family.

        Returns:
            Number of tokens revoked.
        """
        ...

    async def revoke_all_for_user(
        self,
        user_id: UUID,
        now: datetime,
        reason: str,
    ) -> int:
        """Revoke every active token of user_id.

        Returns:
            Number of tokens revoked.
        """
        ...

    async def list_for_user(
        self,
        user_id: UUID,
        include_revoked: bool = False,
    ) -> list[Token]:
        """List tokens of a user, newest first."""
        ...
