"""User database model.

Security:
    - password_hash: NEVER stores plaintext passwords (bcrypt hashed)
    - version: optimistic concurrency counter checked on every UPDATE
"""

from sqlalchemy import JSON, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from account_core.infrastructure.persistence.base import BaseMutableModel


class UserModel(BaseMutableModel):
    """User account row.

    Fields:
        id, created_at, updated_at: from BaseMutableModel
        email: Unique normalized address
        password_hash: Bcrypt hash
        state: AccountState value
        roles: List of UserRole values
        pending_email: Unique address awaiting confirmation (nullable)
        display_name: Profile name (nullable)
        version: Optimistic lock counter

    Indexes:
        - ix_users_email (unique)
        - ix_users_pending_email (unique, NULLs allowed)
    """

    __tablename__ = "users"

    email: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True,
        index=True,
        comment="User email address (unique, lowercase)",
    )

    password_hash: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Bcrypt hashed password",
    )

    state: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        index=True,
        comment="Account state (unverified, verified, blocked)",
    )

    roles: Mapped[list[str]] = mapped_column(
        JSON,
        nullable=False,
        default=list,
        comment="Role names held by the user",
    )

    pending_email: Mapped[str | None] = mapped_column(
        String(255),
        nullable=True,
        unique=True,
        index=True,
        comment="Address awaiting change-email confirmation",
    )

    display_name: Mapped[str | None] = mapped_column(
        String(100),
        nullable=True,
        comment="Profile display name",
    )

    version: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=1,
        comment="Optimistic concurrency counter",
    )
