"""VerificationCodeRepository - SQLAlchemy implementation.

Status changes (consume, supersede) are single conditional UPDATE
statements. The row count tells the caller whether it won.
"""

from datetime import datetime
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from account_core.domain.entities import VerificationCode
from account_core.domain.enums import CodePurpose
from account_core.domain.errors import DuplicateRecordError
from account_core.infrastructure.persistence.base import as_utc
from account_core.infrastructure.persistence.models.verification_code import (
    VerificationCodeModel,
)


class VerificationCodeRepository:
    """SQLAlchemy implementation of VerificationCodeRepository protocol."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def save(self, code: VerificationCode) -> None:
        """Insert a newly issued code.

        Raises:
            DuplicateRecordError: If the user still holds an active code of
                the same purpose (field "active_code").
        """
        self.session.add(self._to_model(code))
        try:
            await self.session.flush()
        except IntegrityError as e:
            raise DuplicateRecordError("active_code") from e

    async def find_by_code(self, code: str) -> VerificationCode | None:
        """Find a code record by value, whatever its status."""
        stmt = (
            select(VerificationCodeModel)
            .where(VerificationCodeModel.code == code)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        code_model = result.scalar_one_or_none()

        if code_model is None:
            return None

        return self._to_domain(code_model)

    async def find_active(
        self,
        user_id: UUID,
        purpose: CodePurpose,
    ) -> VerificationCode | None:
        stmt = (
            select(VerificationCodeModel)
            .where(
                VerificationCodeModel.user_id == user_id,
                VerificationCodeModel.purpose == purpose.value,
                VerificationCodeModel.consumed_at.is_(None),
                VerificationCodeModel.superseded_at.is_(None),
            )
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        code_model = result.scalar_one_or_none()
        return None if code_model is None else self._to_domain(code_model)

    async def supersede_active(
        self,
        user_id: UUID,
        purpose: CodePurpose,
        now: datetime,
    ) -> int:
        """Mark the active code of user_id and purpose as superseded."""
        stmt = (
            update(VerificationCodeModel)
            .where(
                VerificationCodeModel.user_id == user_id,
                VerificationCodeModel.purpose == purpose.value,
                VerificationCodeModel.consumed_at.is_(None),
                VerificationCodeModel.superseded_at.is_(None),
            )
            .values(superseded_at=now)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return result.rowcount

    async def consume(
        self,
        code: str,
        purpose: CodePurpose,
        now: datetime,
    ) -> VerificationCode | None:
        """Consume a usable code; None if it was not usable."""
        stmt = (
            update(VerificationCodeModel)
            .where(
                VerificationCodeModel.code == code,
                VerificationCodeModel.purpose == purpose.value,
                VerificationCodeModel.consumed_at.is_(None),
                VerificationCodeModel.superseded_at.is_(None),
                VerificationCodeModel.expires_at > now,
            )
            .values(consumed_at=now)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        if result.rowcount != 1:
            return None
        return await self.find_by_code(code)

    @staticmethod
    def _to_domain(code_model: VerificationCodeModel) -> VerificationCode:
        return VerificationCode(
            id=code_model.id,
            code=code_model.code,
            purpose=CodePurpose(code_model.purpose),
            user_id=code_model.user_id,
            payload=code_model.payload,
            issued_at=as_utc(code_model.issued_at),
            expires_at=as_utc(code_model.expires_at),
            consumed_at=as_utc(code_model.consumed_at),
            superseded_at=as_utc(code_model.superseded_at),
        )

    @staticmethod
    def _to_model(code: VerificationCode) -> VerificationCodeModel:
        return VerificationCodeModel(
            id=code.id,
            code=code.code,
            purpose=code.purpose.value,
            user_id=code.user_id,
            payload=code.payload,
            issued_at=code.issued_at,
            expires_at=code.expires_at,
            consumed_at=code.consumed_at,
            superseded_at=code.superseded_at,
        )
