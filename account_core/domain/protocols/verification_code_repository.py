"""VerificationCodeRepository protocol.

At most one active (unconsumed, unsuperseded) code exists per user and
purpose. Implementations enforce it with a uniqueness constraint, so
supersede-then-insert is atomic inside one unit of work.
"""

from datetime import datetime
from typing import Protocol
from uuid import UUID

from account_core.domain.entities import VerificationCode
from account_core.domain.enums import CodePurpose


class VerificationCodeRepository(Protocol):
    """Verification code repository protocol (port).

    Methods:
        save: Insert a newly issued code
        find_by_code: Look up a code by its value
        find_active: The unconsumed, unsuperseded code of a user and purpose
        supersede_active: Retire the active code of a user and purpose
        consume: Atomically mark a usable code as consumed
    """

    async def save(self, code: VerificationCode) -> None:
        """Insert a newly issued code.

        Raises:
            DuplicateRecordError: If an active code for the same user and
                purpose still exists (field "active_code").
        """
        ...

    async def find_by_code(self, code: str) -> VerificationCode | None:
        """Find a code record by value, whatever its status."""
        ...

    async def find_active(
        self,
        user_id: UUID,
        purpose: CodePurpose,
    ) -> VerificationCode | None:
        """Find the active code of user_id and purpose, expired or not."""
        ...

    async def supersede_active(
        self,
        user_id: UUID,
        purpose: CodePurpose,
        now: datetime,
    ) -> int:
        """Mark the active code of user_id and purpose as superseded.

        Returns:
            Number of codes superseded (0 or 1).
        """
        ...

    async def consume(
        self,
        code: str,
        purpose: CodePurpose,
        now: datetime,
    ) -> VerificationCode | None:
        """Consume a code in a single conditional write.

        The write only matches a code with the given purpose that is neither
        consumed nor superseded and whose expires_at is after now. Of two
        concurrent consumers exactly one gets the code back.

        Returns:
            The consumed code, or None if nothing matched.
        """
        ...
