"""Unit tests for TokenIssuer.

Runs against the in-memory token repository with a fake clock.
"""

import hashlib
from datetime import timedelta

import pytest
from uuid_extensions import uuid7

from account_core.application.services import TokenIssuer
from account_core.core.enums import ErrorCode
from account_core.core.result import Failure, Success


@pytest.mark.unit
class TestTokenIssuerIssue:
    """Test issuing and authenticating tokens."""

    def test_digest_is_sha256_hex(self):
        assert TokenIssuer.digest("value") == hashlib.sha256(b"value").hexdigest()

    async def test_only_digest_is_stored(self, memory_database, clock):
        async with memory_database.unit_of_work() as store:
            issuer = TokenIssuer(store.tokens, expire_days=30, clock=clock)

            token, value = await issuer.issue(uuid7(), "default")
            stored = await store.tokens.find_by_digest(TokenIssuer.digest(value))

        assert stored is not None
        assert stored.token_digest != value
        assert value not in repr(stored)
        assert token.expires_at == clock.now + timedelta(days=30)

    async def test_non_expiring_tokens(self, memory_database, clock):
        async with memory_database.unit_of_work() as store:
            issuer = TokenIssuer(store.tokens, expire_days=None, clock=clock)

            token, _ = await issuer.issue(uuid7(), "default")

        assert token.expires_at is None

    async def test_authenticate_valid_token(self, memory_database, clock):
        user_id = uuid7()
        async with memory_database.unit_of_work() as store:
            issuer = TokenIssuer(store.tokens, clock=clock)
            token, value = await issuer.issue(user_id, "default")

            result = await issuer.authenticate(value)

        assert isinstance(result, Success)
        assert result.value.id == token.id
        assert result.value.user_id == user_id

    async def test_authenticate_expired_token(self, memory_database, clock):
        async with memory_database.unit_of_work() as store:
            issuer = TokenIssuer(store.tokens, expire_days=1, clock=clock)
            _, value = await issuer.issue(uuid7(), "default")
            clock.advance(days=1)

            result = await issuer.authenticate(value)

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.TOKEN_INVALID

    async def test_authenticate_unknown_token(self, memory_database, clock):
        async with memory_database.unit_of_work() as store:
            result = await TokenIssuer(store.tokens, clock=clock).authenticate("nope")

        assert isinstance(result, Failure)


@pytest.mark.unit
class TestTokenIssuerRevocation:
    """Test revocation by value, id, family and user."""

    async def test_revoke_is_idempotent(self, memory_database, clock):
        async with memory_database.unit_of_work() as store:
            issuer = TokenIssuer(store.tokens, clock=clock)
            _, value = await issuer.issue(uuid7(), "default")

            first = await issuer.revoke(value, "removed")
            second = await issuer.revoke(value, "removed")
            result = await issuer.authenticate(value)

        assert first is True
        assert second is False
        assert isinstance(result, Failure)

    async def test_revoke_family_leaves_other_families(self, memory_database, clock):
        user_id = uuid7()
        async with memory_database.unit_of_work() as store:
            issuer = TokenIssuer(store.tokens, clock=clock)
            _, phone_a = await issuer.issue(user_id, "phone")
            _, phone_b = await issuer.issue(user_id, "phone")
            _, laptop = await issuer.issue(user_id, "laptop")

            revoked = await issuer.revoke_family(user_id, "phone", "family_removed")
            again = await issuer.revoke_family(user_id, "phone", "family_removed")

            assert isinstance(await issuer.authenticate(phone_a), Failure)
            assert isinstance(await issuer.authenticate(phone_b), Failure)
            assert isinstance(await issuer.authenticate(laptop), Success)

        assert revoked == 2
        assert again == 0

    async def test_revoke_family_is_scoped_to_user(self, memory_database, clock):
        owner, other = uuid7(), uuid7()
        async with memory_database.unit_of_work() as store:
            issuer = TokenIssuer(store.tokens, clock=clock)
            _, others_token = await issuer.issue(other, "phone")
            await issuer.issue(owner, "phone")

            revoked = await issuer.revoke_family(owner, "phone", "family_removed")

            assert isinstance(await issuer.authenticate(others_token), Success)

        assert revoked == 1

    async def test_revoke_all(self, memory_database, clock):
        user_id = uuid7()
        async with memory_database.unit_of_work() as store:
            issuer = TokenIssuer(store.tokens, clock=clock)
            await issuer.issue(user_id, "a")
            await issuer.issue(user_id, "b")

            revoked = await issuer.revoke_all(user_id, "password_reset")
            active = await issuer.list_active(user_id)

        assert revoked == 2
        assert active == []

    async def test_list_active_newest_first(self, memory_database, clock):
        user_id = uuid7()
        async with memory_database.unit_of_work() as store:
            issuer = TokenIssuer(store.tokens, clock=clock)
            older, _ = await issuer.issue(user_id, "a")
            clock.advance(minutes=1)
            newer, _ = await issuer.issue(user_id, "b")

            active = await issuer.list_active(user_id)

        assert [token.id for token in active] == [newer.id, older.id]
