"""Verification code issuance and consumption.

Codes are 256-bit URL-safe random strings. Issuing a code retires the
user's previous active code of the same purpose inside the caller's unit of
work; the store's active-code uniqueness constraint makes the pair atomic.

Usage:
    generator = CodeGenerator(codes=store.codes, ttls=ttls)
    code = await generator.issue(user.id, CodePurpose.FORGOT_PASSWORD)

    match await generator.consume(value, CodePurpose.FORGOT_PASSWORD):
        case Success(value=consumed):
            ...
"""

import secrets
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import timedelta
from uuid import UUID

from uuid_extensions import uuid7

from account_core.core.clock import Clock, utc_now
from account_core.core.config import Settings
from account_core.core.constants import CODE_BYTES
from account_core.core.errors import DomainError
from account_core.core.result import Failure, Result, Success
from account_core.domain.entities import VerificationCode
from account_core.domain.enums import CodePurpose
from account_core.domain.errors import invalid_or_expired_code
from account_core.domain.protocols import VerificationCodeRepository


@dataclass(frozen=True, kw_only=True)
class CodePolicy:
    """Lifetime of each code purpose."""

    ttls: Mapping[CodePurpose, timedelta]

    @classmethod
    def from_settings(cls, settings: Settings) -> "CodePolicy":
        return cls(
            ttls={
                CodePurpose.SIGNUP_VERIFICATION: timedelta(
                    hours=settings.signup_code_ttl_hours
                ),
                CodePurpose.FORGOT_PASSWORD: timedelta(
                    hours=settings.forgot_password_code_ttl_hours
                ),
                CodePurpose.CHANGE_EMAIL: timedelta(
                    hours=settings.change_email_code_ttl_hours
                ),
            }
        )

    def ttl_for(self, purpose: CodePurpose) -> timedelta:
        return self.ttls[purpose]


class CodeGenerator:
    """Issues, checks and consumes single-use verification codes.

    Built per unit of work around that unit's code repository.
    """

    def __init__(
        self,
        codes: VerificationCodeRepository,
        policy: CodePolicy,
        clock: Clock = utc_now,
    ) -> None:
        """Initialize generator.

        Args:
            codes: Code repository of the current unit of work.
            policy: Lifetime per purpose.
            clock: Time source.
        """
        self._codes = codes
        self._policy = policy
        self._clock = clock

    @staticmethod
    def generate_code() -> str:
        """Generate a random URL-safe code (256 bits of entropy)."""
        return secrets.token_urlsafe(CODE_BYTES)

    async def issue(
        self,
        user_id: UUID,
        purpose: CodePurpose,
        payload: str | None = None,
    ) -> VerificationCode:
        """Issue a code, superseding the user's active code of this purpose.

        Args:
            user_id: Subject user.
            purpose: What the code authorizes.
            payload: Purpose-specific data (new address for CHANGE_EMAIL).

        Returns:
            The persisted (not yet committed) code.

        Raises:
            DuplicateRecordError: If a concurrent issue for the same user and
                purpose won the race.
        """
        now = self._clock()
        await self._codes.supersede_active(user_id, purpose, now)
        code = VerificationCode(
            id=uuid7(),
            code=self.generate_code(),
            purpose=purpose,
            user_id=user_id,
            payload=payload,
            issued_at=now,
            expires_at=now + self._policy.ttl_for(purpose),
        )
        await self._codes.save(code)
        return code

    async def peek(
        self,
        code: str,
        purpose: CodePurpose,
    ) -> Result[VerificationCode, DomainError]:
        """Check a code without consuming it.

        Returns:
            Success(code) if usable for purpose, Failure(InvalidOrExpiredCode)
            otherwise.
        """
        found = await self._codes.find_by_code(code)
        if (
            found is None
            or found.purpose != purpose
            or not found.is_usable(self._clock())
        ):
            return Failure(error=invalid_or_expired_code())
        return Success(value=found)

    async def consume(
        self,
        code: str,
        purpose: CodePurpose,
    ) -> Result[VerificationCode, DomainError]:
        """Consume a code exactly once.

        Unknown, wrong-purpose, consumed, superseded and expired codes all
        yield the same InvalidOrExpiredCode.
        """
        consumed = await self._codes.consume(code, purpose, self._clock())
        if consumed is None:
            return Failure(error=invalid_or_expired_code())
        return Success(value=consumed)
