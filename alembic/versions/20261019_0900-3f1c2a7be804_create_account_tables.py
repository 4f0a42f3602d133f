"""create_account_tables

Revision ID: 3f1c2a7be804
Revises:
Create Date: 2026-10-19 09:00:00.000000+00:00

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "3f1c2a7be804"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

ACTIVE_CODE = sa.text("consumed_at IS NULL AND superseded_at IS NULL")


def upgrade() -> None:
    """Create users, verification_codes and tokens tables."""
    op.create_table(
        "users",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "email",
            sa.String(length=255),
            nullable=False,
            comment="User email address (unique, lowercase)",
        ),
        sa.Column(
            "password_hash",
            sa.String(length=255),
            nullable=False,
            comment="Bcrypt hashed password",
        ),
        sa.Column(
            "state",
            sa.String(length=20),
            nullable=False,
            comment="Account state (unverified, verified, blocked)",
        ),
        sa.Column(
            "roles",
            sa.JSON(),
            nullable=False,
            comment="Role names held by the user",
        ),
        sa.Column(
            "pending_email",
            sa.String(length=255),
            nullable=True,
            comment="Address awaiting change-email confirmation",
        ),
        sa.Column(
            "display_name",
            sa.String(length=100),
            nullable=True,
            comment="Profile display name",
        ),
        sa.Column(
            "version",
            sa.Integer(),
            nullable=False,
            comment="Optimistic concurrency counter",
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)
    op.create_index("ix_users_pending_email", "users", ["pending_email"], unique=True)
    op.create_index("ix_users_state", "users", ["state"])

    op.create_table(
        "verification_codes",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "code",
            sa.String(length=64),
            nullable=False,
            comment="Opaque URL-safe code value",
        ),
        sa.Column(
            "purpose",
            sa.String(length=32),
            nullable=False,
            comment="signup_verification, forgot_password or change_email",
        ),
        sa.Column("user_id", sa.Uuid(), nullable=False),
        sa.Column(
            "payload",
            sa.String(length=255),
            nullable=True,
            comment="Purpose-specific data (new address for change_email)",
        ),
        sa.Column("issued_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("consumed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("superseded_at", sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_verification_codes_code", "verification_codes", ["code"], unique=True
    )
    op.create_index(
        "ix_verification_codes_user_id", "verification_codes", ["user_id"]
    )
    op.create_index(
        "uq_verification_codes_active",
        "verification_codes",
        ["user_id", "purpose"],
        unique=True,
        postgresql_where=ACTIVE_CODE,
        sqlite_where=ACTIVE_CODE,
    )

    op.create_table(
        "tokens",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column("user_id", sa.Uuid(), nullable=False),
        sa.Column(
            "family",
            sa.String(length=100),
            nullable=False,
            comment="Client/device grouping key",
        ),
        sa.Column(
            "token_digest",
            sa.String(length=64),
            nullable=False,
            comment="Hex SHA-256 of the token value",
        ),
        sa.Column("issued_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column(
            "expires_at",
            sa.DateTime(timezone=True),
            nullable=True,
            comment="NULL = valid until revoked",
        ),
        sa.Column("revoked_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("revoked_reason", sa.String(length=50), nullable=True),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_tokens_token_digest", "tokens", ["token_digest"], unique=True)
    op.create_index("ix_tokens_user_family", "tokens", ["user_id", "family"])


def downgrade() -> None:
    """Drop account tables."""
    op.drop_index("ix_tokens_user_family", table_name="tokens")
    op.drop_index("ix_tokens_token_digest", table_name="tokens")
    op.drop_table("tokens")

    op.drop_index("uq_verification_codes_active", table_name="verification_codes")
    op.drop_index("ix_verification_codes_user_id", table_name="verification_codes")
    op.drop_index("ix_verification_codes_code", table_name="verification_codes")
    op.drop_table("verification_codes")

    op.drop_index("ix_users_state", table_name="users")
    op.drop_index("ix_users_pending_email", table_name="users")
    op.drop_index("ix_users_email", table_name="users")
    op.drop_table("users")
