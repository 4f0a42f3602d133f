"""Bearer token database model.

Only the SHA-256 digest of the token value is stored (unique index for
O(1) lookup). ix_tokens_user_family serves enumeration and revocation by
user and family.
"""

from datetime import datetime
from uuid import UUID

from sqlalchemy import DateTime, ForeignKey, Index, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from account_core.core.constants import TOKEN_DIGEST_LENGTH, TOKEN_FAMILY_MAX_LENGTH
from account_core.infrastructure.persistence.base import BaseModel


class TokenModel(BaseModel):
    """Bearer token row."""

    __tablename__ = "tokens"
    __table_args__ = (Index("ix_tokens_user_family", "user_id", "family"),)

    user_id: Mapped[UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )

    family: Mapped[str] = mapped_column(
        String(TOKEN_FAMILY_MAX_LENGTH),
        nullable=False,
        comment="Client/device grouping key",
    )

    token_digest: Mapped[str] = mapped_column(
        String(TOKEN_DIGEST_LENGTH),
        nullable=False,
        unique=True,
        index=True,
        comment="Hex SHA-256 of the token value",
    )

    issued_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    expires_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        comment="NULL = valid until revoked",
    )

    revoked_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    revoked_reason: Mapped[str | None] = mapped_column(String(50), nullable=True)
