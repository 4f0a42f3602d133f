"""Verification code domain entity.

A single-use, time-bounded secret bound to a user and a purpose. Only the
persistence layer flips consumed_at and superseded_at, through conditional
updates, so a code is accepted at most once under concurrency.
"""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from account_core.domain.enums import CodePurpose


@dataclass
class VerificationCode:
    """Single-use verification code.

    Attributes:
        id: Unique code record identifier.
        code: Opaque URL-safe random value sent to the user.
        purpose: What the code authorizes.
        user_id: Subject user.
        payload: Purpose-specific data (the new address for CHANGE_EMAIL).
        issued_at: When the code was issued.
        expires_at: When the code stops being accepted.
        consumed_at: When the code was used (None if unused).
        superseded_at: When a newer code of the same purpose replaced it.
    """

    id: UUID
    code: str
    purpose: CodePurpose
    user_id: UUID
    issued_at: datetime
    expires_at: datetime
    payload: str | None = None
    consumed_at: datetime | None = None
    superseded_at: datetime | None = None

    def is_expired(self, now: datetime | None = None) -> bool:
        """Check if code has passed its expiry.

        Args:
            now: Reference time (defaults to current UTC time).

        Returns:
            bool: True if expires_at is not in the future.
        """
        return (now or datetime.now(UTC)) >= self.expires_at

    def is_usable(self, now: datetime | None = None) -> bool:
        """True if the code is unconsumed, not superseded and unexpired."""
        return (
            self.consumed_at is None
            and self.superseded_at is None
            and not self.is_expired(now)
        )
