"""Verification code database model.

The partial unique index uq_verification_codes_active allows at most one
active (unconsumed, unsuperseded) code per user and purpose. Superseding the
old code and inserting the new one therefore either both commit or the
loser of a race gets an IntegrityError.
"""

from datetime import datetime
from uuid import UUID

from sqlalchemy import DateTime, ForeignKey, Index, String, Uuid, text
from sqlalchemy.orm import Mapped, mapped_column

from account_core.infrastructure.persistence.base import BaseModel

_ACTIVE = text("consumed_at IS NULL AND superseded_at IS NULL")


class VerificationCodeModel(BaseModel):
    """Single-use verification code row (immutable except status columns)."""

    __tablename__ = "verification_codes"
    __table_args__ = (
        Index(
            "uq_verification_codes_active",
            "user_id",
            "purpose",
            unique=True,
            postgresql_where=_ACTIVE,
            sqlite_where=_ACTIVE,
        ),
    )

    code: Mapped[str] = mapped_column(
        String(64),
        nullable=False,
        unique=True,
        index=True,
        comment="Opaque URL-safe code value",
    )

    purpose: Mapped[str] = mapped_column(
        String(32),
        nullable=False,
        comment="signup_verification, forgot_password or change_email",
    )

    user_id: Mapped[UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    payload: Mapped[str | None] = mapped_column(
        String(255),
        nullable=True,
        comment="Purpose-specific data (new address for change_email)",
    )

    issued_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    expires_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    consumed_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    superseded_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )
