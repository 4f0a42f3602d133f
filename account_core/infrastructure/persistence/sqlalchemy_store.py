"""SQLAlchemy-backed AccountStore (one session per unit of work)."""

from sqlalchemy.ext.asyncio import AsyncSession

from account_core.infrastructure.persistence.repositories import (
    TokenRepository,
    UserRepository,
    VerificationCodeRepository,
)


class SqlAlchemyAccountStore:
    """AccountStore over a single AsyncSession.

    Repositories flush but never commit; commit() and rollback() end the
    transaction for all three at once.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.users = UserRepository(session)
        self.codes = VerificationCodeRepository(session)
        self.tokens = TokenRepository(session)

    async def commit(self) -> None:
        await self.session.commit()

    async def rollback(self) -> None:
        await self.session.rollback()
