"""Bearer token issuance, authentication and revocation.

Token values are opaque 256-bit URL-safe strings. Only their SHA-256 digest
is stored, which keeps lookup by value a single indexed equality match.
"""

import hashlib
import secrets
from datetime import timedelta
from uuid import UUID

from uuid_extensions import uuid7

from account_core.core.clock import Clock, utc_now
from account_core.core.constants import TOKEN_BYTES
from account_core.core.errors import DomainError
from account_core.core.result import Failure, Result, Success
from account_core.domain.entities import Token
from account_core.domain.errors import invalid_token
from account_core.domain.protocols import TokenRepository


class TokenIssuer:
    """Mints and revokes bearer tokens bound to a user and a family.

    Issuing never touches the user's other tokens, so several sessions
    (one per device family) coexist and are revoked independently.

    Example:
        >>> issuer = TokenIssuer(tokens=store.tokens, expire_days=30)
        >>> token, value = await issuer.issue(user.id, "iphone")
        >>> await issuer.authenticate(value)
        Success(value=Token(...))
    """

    def __init__(
        self,
        tokens: TokenRepository,
        expire_days: int | None = 30,
        clock: Clock = utc_now,
    ) -> None:
        """Initialize issuer.

        Args:
            tokens: Token repository of the current unit of work.
            expire_days: Token lifetime (None = valid until revoked).
            clock: Time source.
        """
        self._tokens = tokens
        self._expire_days = expire_days
        self._clock = clock

    @staticmethod
    def generate_token() -> str:
        """Generate a random URL-safe token value."""
        return secrets.token_urlsafe(TOKEN_BYTES)

    @staticmethod
    def digest(token_value: str) -> str:
        """Hex SHA-256 digest of a token value."""
        return hashlib.sha256(token_value.encode("utf-8")).hexdigest()

    async def issue(self, user_id: UUID, family: str) -> tuple[Token, str]:
        """Create a new token.

        Returns:
            Tuple of (stored token, plaintext value). The plaintext is not
            recoverable afterwards.
        """
        now = self._clock()
        value = self.generate_token()
        token = Token(
            id=uuid7(),
            user_id=user_id,
            family=family,
            token_digest=self.digest(value),
            issued_at=now,
            expires_at=(
                now + timedelta(days=self._expire_days)
                if self._expire_days is not None
                else None
            ),
        )
        await self._tokens.save(token)
        return token, value

    async def find(self, token_value: str) -> Token | None:
        """Look up a token by value, whatever its status."""
        return await self._tokens.find_by_digest(self.digest(token_value))

    async def authenticate(self, token_value: str) -> Result[Token, DomainError]:
        """Resolve a token value to its token.

        Returns:
            Success(token) if found, unrevoked and unexpired,
            Failure(InvalidToken) otherwise.
        """
        token = await self.find(token_value)
        if token is None or not token.is_valid(self._clock()):
            return Failure(error=invalid_token())
        return Success(value=token)

    async def revoke(self, token_value: str, reason: str) -> bool:
        """Revoke by value. Idempotent; True only if this call revoked it."""
        return await self._tokens.revoke(self.digest(token_value), self._clock(), reason)

    async def revoke_by_id(self, token_id: UUID, reason: str) -> bool:
        """Revoke by id. Idempotent."""
        return await self._tokens.revoke_by_id(token_id, self._clock(), reason)

    async def revoke_family(self, user_id: UUID, family: str, reason: str) -> int:
        """Revoke every active token of one family of a user."""
        return await self._tokens.revoke_family(user_id, family, self._clock(), reason)

    async def revoke_all(self, user_id: UUID, reason: str) -> int:
        """Revoke every active token of a user."""
        return await self._tokens.revoke_all_for_user(user_id, self._clock(), reason)

    async def list_active(self, user_id: UUID) -> list[Token]:
        """Tokens of a user that can still authenticate, newest first."""
        now = self._clock()
        tokens = await self._tokens.list_for_user(user_id)
        return [token for token in tokens if token.is_valid(now)]
