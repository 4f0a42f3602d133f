"""In-memory AccountStore for tests and zero-configuration development runs.

Units of work are serialized by one asyncio.Lock. Each unit of work gets
its own table dicts sharing the committed records; a write never mutates a
shared record but stores a replacement under the same key. commit()
publishes the working dicts, anything else throws them away. Opening a unit
of work copies references, not records, but lookups are linear scans: use
the SQLAlchemy store for real workloads.

Unique constraints and version checks mirror the SQLAlchemy schema so both
stores fail the same way.
"""

import asyncio
import copy
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from dataclasses import dataclass, field, replace
from datetime import datetime
from uuid import UUID

from account_core.domain.entities import Token, User, VerificationCode
from account_core.domain.enums import CodePurpose
from account_core.domain.errors import DuplicateRecordError, StaleRecordError


@dataclass
class _Tables:
    users: dict[UUID, User] = field(default_factory=dict)
    codes: dict[UUID, VerificationCode] = field(default_factory=dict)
    tokens: dict[UUID, Token] = field(default_factory=dict)

    def snapshot(self) -> "_Tables":
        """Working view sharing every record with self."""
        return _Tables(
            users=dict(self.users),
            codes=dict(self.codes),
            tokens=dict(self.tokens),
        )


class InMemoryUserRepository:
    """Dict-backed UserRepository."""

    def __init__(self, tables: _Tables) -> None:
        self._tables = tables

    async def find_by_id(self, user_id: UUID) -> User | None:
        user = self._tables.users.get(user_id)
        return copy.deepcopy(user) if user else None

    async def find_by_email(self, email: str) -> User | None:
        return self._first(lambda user: user.email == email)

    async def find_by_pending_email(self, email: str) -> User | None:
        return self._first(lambda user: user.pending_email == email)

    async def save(self, user: User) -> None:
        self._check_unique(user)
        self._tables.users[user.id] = copy.deepcopy(user)

    async def update(self, user: User) -> None:
        stored = self._tables.users.get(user.id)
        if stored is None or stored.version != user.version:
            raise StaleRecordError(f"User {user.id} changed since it was read")
        self._check_unique(user)
        user.version += 1
        self._tables.users[user.id] = copy.deepcopy(user)

    def _first(self, predicate) -> User | None:
        for user in self._tables.users.values():
            if predicate(user):
                return copy.deepcopy(user)
        return None

    def _check_unique(self, user: User) -> None:
        for other in self._tables.users.values():
            if other.id == user.id:
                continue
            if other.email == user.email:
                raise DuplicateRecordError("email")
            if user.pending_email is not None and other.pending_email == user.pending_email:
                raise DuplicateRecordError("pending_email")


class InMemoryVerificationCodeRepository:
    """Dict-backed VerificationCodeRepository."""

    def __init__(self, tables: _Tables) -> None:
        self._tables = tables

    async def save(self, code: VerificationCode) -> None:
        if code.consumed_at is None and code.superseded_at is None:
            if self._active(code.user_id, code.purpose) is not None:
                raise DuplicateRecordError("active_code")
        self._tables.codes[code.id] = copy.deepcopy(code)

    async def find_by_code(self, code: str) -> VerificationCode | None:
        for record in self._tables.codes.values():
            if record.code == code:
                return copy.deepcopy(record)
        return None

    async def find_active(
        self,
        user_id: UUID,
        purpose: CodePurpose,
    ) -> VerificationCode | None:
        active = self._active(user_id, purpose)
        return None if active is None else copy.deepcopy(active)

    async def supersede_active(
        self,
        user_id: UUID,
        purpose: CodePurpose,
        now: datetime,
    ) -> int:
        active = self._active(user_id, purpose)
        if active is None:
            return 0
        self._write(active, superseded_at=now)
        return 1

    async def consume(
        self,
        code: str,
        purpose: CodePurpose,
        now: datetime,
    ) -> VerificationCode | None:
        for record in self._tables.codes.values():
            if record.code == code and record.purpose == purpose and record.is_usable(now):
                return copy.deepcopy(self._write(record, consumed_at=now))
        return None

    def _write(self, record: VerificationCode, **changes) -> VerificationCode:
        updated = replace(record, **changes)
        self._tables.codes[record.id] = updated
        return updated

    def _active(self, user_id: UUID, purpose: CodePurpose) -> VerificationCode | None:
        for record in self._tables.codes.values():
            if (
                record.user_id == user_id
                and record.purpose == purpose
                and record.consumed_at is None
                and record.superseded_at is None
            ):
                return record
        return None


class InMemoryTokenRepository:
    """Dict-backed TokenRepository."""

    def __init__(self, tables: _Tables) -> None:
        self._tables = tables

    async def save(self, token: Token) -> None:
        self._tables.tokens[token.id] = copy.deepcopy(token)

    async def find_by_digest(self, token_digest: str) -> Token | None:
        for token in self._tables.tokens.values():
            if token.token_digest == token_digest:
                return copy.deepcopy(token)
        return None

    async def revoke(self, token_digest: str, now: datetime, reason: str) -> bool:
        return self._revoke(lambda t: t.token_digest == token_digest, now, reason) == 1

    async def revoke_by_id(self, token_id: UUID, now: datetime, reason: str) -> bool:
        return self._revoke(lambda t: t.id == token_id, now, reason) == 1

    async def revoke_family(
        self,
        user_id: UUID,
        family: str,
        now: datetime,
        reason: str,
    ) -> int:
        return self._revoke(
            lambda t: t.user_id == user_id and t.family == family, now, reason
        )

    async def revoke_all_for_user(
        self,
        user_id: UUID,
        now: datetime,
        reason: str,
    ) -> int:
        return self._revoke(lambda t: t.user_id == user_id, now, reason)

    async def list_for_user(
        self,
        user_id: UUID,
        include_revoked: bool = False,
    ) -> list[Token]:
        tokens = [
            copy.deepcopy(token)
            for token in self._tables.tokens.values()
            if token.user_id == user_id and (include_revoked or not token.is_revoked())
        ]
        tokens.sort(key=lambda t: (t.issued_at, t.id), reverse=True)
        return tokens

    def _revoke(self, predicate, now: datetime, reason: str) -> int:
        matched = [
            token
            for token in self._tables.tokens.values()
            if token.revoked_at is None and predicate(token)
        ]
        for token in matched:
            self._tables.tokens[token.id] = replace(
                token, revoked_at=now, revoked_reason=reason
            )
        return len(matched)


class InMemoryAccountStore:
    """One unit of work over the in-memory tables."""

    def __init__(self, database: "InMemoryDatabase") -> None:
        self._database = database
        self._bind(database.tables.snapshot())

    def _bind(self, tables: _Tables) -> None:
        self._working = tables
        self.users = InMemoryUserRepository(tables)
        self.codes = InMemoryVerificationCodeRepository(tables)
        self.tokens = InMemoryTokenRepository(tables)

    async def commit(self) -> None:
        self._database.tables = self._working
        self._bind(self._working.snapshot())

    async def rollback(self) -> None:
        self._bind(self._database.tables.snapshot())


class InMemoryDatabase:
    """Process-local tables shared by every unit of work it opens.

    Usage:
        db = InMemoryDatabase()
        service = AccountService(store_factory=db.unit_of_work, ...)
    """

    def __init__(self) -> None:
        self.tables = _Tables()
        self._lock = asyncio.Lock()

    @asynccontextmanager
    async def unit_of_work(self) -> AsyncGenerator[InMemoryAccountStore, None]:
        """Open a serialized unit of work; uncommitted writes are dropped."""
        async with self._lock:
            yield InMemoryAccountStore(self)
