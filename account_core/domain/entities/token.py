"""Bearer token domain entity.

Only the SHA-256 digest of a token value is held; the plaintext is returned
once, to the caller that created the token.
"""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID


@dataclass
class Token:
    """Bearer token bound to a user and a family.

    Attributes:
        id: Unique token identifier.
        user_id: Subject user.
        family: Client/device grouping key for selective revocation.
        token_digest: Hex SHA-256 digest of the token value.
        issued_at: When the token was issued.
        expires_at: Expiry (None = valid until revoked).
        revoked_at: When revoked (None if active).
        revoked_reason: Why it was revoked.
    """

    id: UUID
    user_id: UUID
    family: str
    token_digest: str
    issued_at: datetime
    expires_at: datetime | None = None
    revoked_at: datetime | None = None
    revoked_reason: str | None = None

    def is_expired(self, now: datetime | None = None) -> bool:
        """Check if token has expired. Non-expiring tokens never do."""
        if self.expires_at is None:
            return False
        return (now or datetime.now(UTC)) >= self.expires_at

    def is_revoked(self) -> bool:
        """Check if token has been revoked."""
        return self.revoked_at is not None

    def is_valid(self, now: datetime | None = None) -> bool:
        """Check if token can authenticate (not revoked, not expired)."""
        return not self.is_revoked() and not self.is_expired(now)
