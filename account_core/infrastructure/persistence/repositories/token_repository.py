"""TokenRepository - SQLAlchemy implementation of TokenRepository protocol.

Adapter for hexagonal architecture.
Maps between domain Token entities and database TokenModel.
"""

from datetime import datetime
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from account_core.domain.entities import Token
from account_core.infrastructure.persistence.base import as_utc
from account_core.infrastructure.persistence.models.token import TokenModel


class TokenRepository:
    """SQLAlchemy implementation of TokenRepository protocol.

    Revocation is a conditional UPDATE on revoked_at IS NULL, which makes
    every revoke method idempotent and the returned counts exact.

    Attributes:
        session: SQLAlchemy async session for database operations.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    async def save(self, token: Token) -> None:
        """Insert a newly issued token."""
        self.session.add(self._to_model(token))
        await self.session.flush()

    async def find_by_digest(self, token_digest: str) -> Token | None:
        """Find token by value digest.

        Args:
            token_digest: Hex SHA-256 of the token value.

        Returns:
            Domain Token entity if found (even if revoked), None otherwise.
        """
        stmt = (
            select(TokenModel)
            .where(TokenModel.token_digest == token_digest)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        token_model = result.scalar_one_or_none()

        if token_model is None:
            return None

        return self._to_domain(token_model)

    async def revoke(self, token_digest: str, now: datetime, reason: str) -> bool:
        """Revoke one token by digest."""
        count = await self._revoke_where(
            now, reason, TokenModel.token_digest == token_digest
        )
        return count == 1

    async def revoke_by_id(self, token_id: UUID, now: datetime, reason: str) -> bool:
        """Revoke one token by id."""
        count = await self._revoke_where(now, reason, TokenModel.id == token_id)
        return count == 1

    async def revoke_family(
        self,
        user_id: UUID,
        family: str,
        now: datetime,
        reason: str,
    ) -> int:
        """Revoke every active token of user_id in family."""
        return await self._revoke_where(
            now,
            reason,
            TokenModel.user_id == user_id,
            TokenModel.family == family,
        )

    async def revoke_all_for_user(
        self,
        user_id: UUID,
        now: datetime,
        reason: str,
    ) -> int:
        """Revoke every active token of user_id (password reset)."""
        return await self._revoke_where(now, reason, TokenModel.user_id == user_id)

    async def list_for_user(
        self,
        user_id: UUID,
        include_revoked: bool = False,
    ) -> list[Token]:
        """List tokens of a user, newest first."""
        stmt = (
            select(TokenModel)
            .where(TokenModel.user_id == user_id)
            .order_by(TokenModel.issued_at.desc(), TokenModel.id.desc())
            .execution_options(populate_existing=True)
        )
        if not include_revoked:
            stmt = stmt.where(TokenModel.revoked_at.is_(None))

        result = await self.session.execute(stmt)
        return [self._to_domain(model) for model in result.scalars().all()]

    async def _revoke_where(self, now: datetime, reason: str, *criteria) -> int:
        stmt = (
            update(TokenModel)
            .where(*criteria, TokenModel.revoked_at.is_(None))
            .values(revoked_at=now, revoked_reason=reason)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return result.rowcount

    @staticmethod
    def _to_domain(token_model: TokenModel) -> Token:
        """Convert database model to domain entity."""
        return Token(
            id=token_model.id,
            user_id=token_model.user_id,
            family=token_model.family,
            token_digest=token_model.token_digest,
            issued_at=as_utc(token_model.issued_at),
            expires_at=as_utc(token_model.expires_at),
            revoked_at=as_utc(token_model.revoked_at),
            revoked_reason=token_model.revoked_reason,
        )

    @staticmethod
    def _to_model(token: Token) -> TokenModel:
        """Convert domain entity to database model."""
        return TokenModel(
            id=token.id,
            user_id=token.user_id,
            family=token.family,
            token_digest=token.token_digest,
            issued_at=token.issued_at,
            expires_at=token.expires_at,
            revoked_at=token.revoked_at,
            revoked_reason=token.revoked_reason,
        )
