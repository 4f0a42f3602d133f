"""Integration tests for the SQLAlchemy repositories (SQLite via aiosqlite).

Tests cover:
- Domain <-> model mapping (UTC datetimes, roles, enums)
- Unique email / pending email / active code constraints
- Optimistic version check on update
- Conditional consume and revoke statements
- Commit / rollback of the unit of work
"""

from datetime import UTC, datetime, timedelta

import pytest
from uuid_extensions import uuid7

from account_core.domain.entities import Token, User, VerificationCode
from account_core.domain.enums import AccountState, CodePurpose, UserRole
from account_core.domain.errors import DuplicateRecordError, StaleRecordError

NOW = datetime(2026, 1, 15, 12, 0, tzinfo=UTC)


def make_user(email: str = "user@example.com", **overrides) -> User:
    values = {
        "id": uuid7(),
        "email": email,
        "password_hash": "hashed",
        "state": AccountState.UNVERIFIED,
        "created_at": NOW,
        "updated_at": NOW,
    }
    values.update(overrides)
    return User(**values)


def make_code(user_id, purpose=CodePurpose.FORGOT_PASSWORD, **overrides):
    values = {
        "id": uuid7(),
        "code": f"code-{uuid7().hex}",
        "purpose": purpose,
        "user_id": user_id,
        "issued_at": NOW,
        "expires_at": NOW + timedelta(hours=1),
    }
    values.update(overrides)
    return VerificationCode(**values)


def make_token(user_id, family="default", **overrides) -> Token:
    values = {
        "id": uuid7(),
        "user_id": user_id,
        "family": family,
        "token_digest": uuid7().hex + uuid7().hex,
        "issued_at": NOW,
        "expires_at": NOW + timedelta(days=30),
    }
    values.update(overrides)
    return Token(**values)


async def persisted_user(database, **overrides) -> User:
    user = make_user(**overrides)
    async with database.unit_of_work() as store:
        await store.users.save(user)
        await store.commit()
    return user


@pytest.mark.integration
class TestUserRepository:
    """Test SQLAlchemy UserRepository."""

    async def test_round_trip(self, database):
        user = await persisted_user(
            database,
            roles={UserRole.USER, UserRole.ADMIN},
            display_name="Ada",
        )

        async with database.unit_of_work() as store:
            found = await store.users.find_by_email("user@example.com")

        assert found.id == user.id
        assert found.state == AccountState.UNVERIFIED
        assert found.roles == {UserRole.USER, UserRole.ADMIN}
        assert found.display_name == "Ada"
        assert found.created_at == NOW
        assert found.created_at.tzinfo is not None

    async def test_uncommitted_save_is_discarded(self, database):
        user = make_user()
        async with database.unit_of_work() as store:
            await store.users.save(user)

        async with database.unit_of_work() as store:
            assert await store.users.find_by_id(user.id) is None

    async def test_duplicate_email(self, database):
        await persisted_user(database, email="dup@example.com")

        async with database.unit_of_work() as store:
            with pytest.raises(DuplicateRecordError) as exc_info:
                await store.users.save(make_user("dup@example.com"))

        assert exc_info.value.field == "email"

    async def test_duplicate_pending_email(self, database):
        await persisted_user(
            database, email="a@example.com", pending_email="p@example.com"
        )

        async with database.unit_of_work() as store:
            with pytest.raises(DuplicateRecordError) as exc_info:
                await store.users.save(
                    make_user("b@example.com", pending_email="p@example.com")
                )

        assert exc_info.value.field == "pending_email"

    async def test_update_increments_version(self, database):
        user = await persisted_user(database)

        async with database.unit_of_work() as store:
            loaded = await store.users.find_by_id(user.id)
            loaded.state = AccountState.VERIFIED
            loaded.pending_email = "next@example.com"
            await store.users.update(loaded)
            await store.commit()

        async with database.unit_of_work() as store:
            found = await store.users.find_by_id(user.id)
            by_pending = await store.users.find_by_pending_email("next@example.com")

        assert loaded.version == 2
        assert found.version == 2
        assert found.state == AccountState.VERIFIED
        assert by_pending.id == user.id

    async def test_stale_update_rejected(self, database):
        user = await persisted_user(database)
        async with database.unit_of_work() as store:
            first = await store.users.find_by_id(user.id)
        async with database.unit_of_work() as store:
            second = await store.users.find_by_id(user.id)

        async with database.unit_of_work() as store:
            await store.users.update(first)
            await store.commit()

        async with database.unit_of_work() as store:
            with pytest.raises(StaleRecordError):
                await store.users.update(second)


@pytest.mark.integration
class TestVerificationCodeRepository:
    """Test SQLAlchemy VerificationCodeRepository."""

    async def test_second_active_code_rejected(self, database):
        user = await persisted_user(database)
        async with database.unit_of_work() as store:
            await store.codes.save(make_code(user.id))
            await store.commit()

        async with database.unit_of_work() as store:
            with pytest.raises(DuplicateRecordError) as exc_info:
                await store.codes.save(make_code(user.id))

        assert exc_info.value.field == "active_code"

    async def test_supersede_then_issue(self, database):
        user = await persisted_user(database)
        old = make_code(user.id)
        async with database.unit_of_work() as store:
            await store.codes.save(old)
            await store.commit()

        async with database.unit_of_work() as store:
            count = await store.codes.supersede_active(
                user.id, CodePurpose.FORGOT_PASSWORD, NOW
            )
            await store.codes.save(make_code(user.id))
            await store.commit()

        async with database.unit_of_work() as store:
            stale = await store.codes.find_by_code(old.code)

        assert count == 1
        assert stale.superseded_at == NOW

    async def test_find_active(self, database):
        user = await persisted_user(database)
        code = make_code(user.id, CodePurpose.CHANGE_EMAIL, payload="new@example.com")
        async with database.unit_of_work() as store:
            await store.codes.save(code)
            await store.commit()

        async with database.unit_of_work() as store:
            found = await store.codes.find_active(user.id, CodePurpose.CHANGE_EMAIL)
            other = await store.codes.find_active(user.id, CodePurpose.FORGOT_PASSWORD)
            await store.codes.consume(code.code, CodePurpose.CHANGE_EMAIL, NOW)
            after = await store.codes.find_active(user.id, CodePurpose.CHANGE_EMAIL)

        assert found.payload == "new@example.com"
        assert found.expires_at == code.expires_at
        assert other is None
        assert after is None

    async def test_consume_once(self, database):
        user = await persisted_user(database)
        code = make_code(user.id)
        async with database.unit_of_work() as store:
            await store.codes.save(code)
            await store.commit()

        async with database.unit_of_work() as store:
            first = await store.codes.consume(code.code, CodePurpose.FORGOT_PASSWORD, NOW)
            second = await store.codes.consume(
                code.code, CodePurpose.FORGOT_PASSWORD, NOW
            )
            await store.commit()

        assert first is not None
        assert first.consumed_at == NOW
        assert second is None

    async def test_consume_respects_purpose_and_expiry(self, database):
        user = await persisted_user(database)
        code = make_code(user.id)
        async with database.unit_of_work() as store:
            await store.codes.save(code)
            await store.commit()

        async with database.unit_of_work() as store:
            wrong_purpose = await store.codes.consume(
                code.code, CodePurpose.CHANGE_EMAIL, NOW
            )
            expired = await store.codes.consume(
                code.code, CodePurpose.FORGOT_PASSWORD, NOW + timedelta(hours=1)
            )

        assert wrong_purpose is None
        assert expired is None


@pytest.mark.integration
class TestTokenRepository:
    """Test SQLAlchemy TokenRepository."""

    async def test_find_and_revoke(self, database):
        user = await persisted_user(database)
        token = make_token(user.id)
        async with database.unit_of_work() as store:
            await store.tokens.save(token)
            await store.commit()

        async with database.unit_of_work() as store:
            first = await store.tokens.revoke(token.token_digest, NOW, "removed")
            second = await store.tokens.revoke(token.token_digest, NOW, "removed")
            found = await store.tokens.find_by_digest(token.token_digest)
            await store.commit()

        assert first is True
        assert second is False
        assert found.revoked_at == NOW
        assert found.revoked_reason == "removed"

    async def test_revoke_family_and_all(self, database):
        user = await persisted_user(database)
        async with database.unit_of_work() as store:
            for family in ("phone", "phone", "laptop"):
                await store.tokens.save(make_token(user.id, family))
            await store.commit()

        async with database.unit_of_work() as store:
            by_family = await store.tokens.revoke_family(user.id, "phone", NOW, "family")
            remaining = await store.tokens.revoke_all_for_user(user.id, NOW, "reset")
            everything = await store.tokens.list_for_user(user.id, include_revoked=True)
            active = await store.tokens.list_for_user(user.id)

        assert by_family == 2
        assert remaining == 1
        assert len(everything) == 3
        assert active == []

    async def test_list_newest_first(self, database):
        user = await persisted_user(database)
        older = make_token(user.id, issued_at=NOW)
        newer = make_token(user.id, issued_at=NOW + timedelta(minutes=5))
        async with database.unit_of_work() as store:
            await store.tokens.save(older)
            await store.tokens.save(newer)
            await store.commit()

        async with database.unit_of_work() as store:
            tokens = await store.tokens.list_for_user(user.id)

        assert [token.id for token in tokens] == [newer.id, older.id]


@pytest.mark.integration
class TestDatabaseHealth:
    async def test_check_connection_on_live_database(self, database):
        assert await database.check_connection() is True
