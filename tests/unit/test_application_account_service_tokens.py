"""Unit tests for AccountService bearer tokens.

Tests cover:
- create_token: default family, validation, blocked accounts
- authenticate: valid, revoked, expired, blocked user
- remove_token / remove_token_family: ownership, idempotency, scoping
- list_tokens
"""

import pytest
from uuid_extensions import uuid7

from account_core.core.enums import ErrorCode
from account_core.core.result import Failure, Success
from account_core.domain.events import TokenCreated, TokenRemoved
from tests.utils.utils import make_admin, signup, signup_verified


@pytest.mark.unit
class TestCreateToken:
    """Test AccountService.create_token()."""

    async def test_default_family(self, account_service, event_bus, clock):
        view = await signup_verified(account_service, event_bus)

        result = await account_service.create_token(view.id)

        assert isinstance(result, Success)
        descriptor = result.value
        assert descriptor.family == "default"
        assert descriptor.issued_at == clock.now
        assert len(descriptor.token) == 43
        assert event_bus.of_type(TokenCreated)[-1].token_id == descriptor.token_id

    async def test_unverified_user_may_hold_tokens(self, account_service):
        view = await signup(account_service)

        result = await account_service.create_token(view.id, "web")

        assert isinstance(result, Success)

    @pytest.mark.parametrize("family", ["", "bad family", "x" * 101])
    async def test_invalid_family(self, account_service, event_bus, family):
        view = await signup_verified(account_service, event_bus)

        result = await account_service.create_token(view.id, family)

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.VALIDATION_FAILED
        assert result.error.field == "family"

    async def test_unknown_user(self, account_service):
        result = await account_service.create_token(uuid7())

        assert result.error.code == ErrorCode.USER_NOT_FOUND


@pytest.mark.unit
class TestAuthenticate:
    """Test AccountService.authenticate()."""

    async def test_resolves_user(self, account_service, event_bus):
        view = await signup_verified(account_service, event_bus)
        token = (await account_service.create_token(view.id)).value

        result = await account_service.authenticate(token.token)

        assert isinstance(result, Success)
        assert result.value.id == view.id

    async def test_expired_token(self, account_service, event_bus, clock):
        view = await signup_verified(account_service, event_bus)
        token = (await account_service.create_token(view.id)).value
        clock.advance(days=30)

        result = await account_service.authenticate(token.token)

        assert result.error.code == ErrorCode.TOKEN_INVALID

    async def test_blocked_user_token_rejected(
        self, account_service, event_bus, memory_database
    ):
        admin = await signup_verified(account_service, event_bus)
        await make_admin(memory_database, admin.id)
        view = await signup_verified(account_service, event_bus)
        token = (await account_service.create_token(view.id)).value
        await account_service.update_user(view.id, {"state": "blocked"}, admin.id)

        result = await account_service.authenticate(token.token)

        assert result.error.code == ErrorCode.TOKEN_INVALID

    async def test_garbage_token(self, account_service):
        result = await account_service.authenticate("not-a-token")

        assert result.error.code == ErrorCode.TOKEN_INVALID


@pytest.mark.unit
class TestRemoveTokens:
    """Test remove_token(), remove_token_family() and list_tokens()."""

    async def test_remove_token(self, account_service, event_bus):
        view = await signup_verified(account_service, event_bus)
        token = (await account_service.create_token(view.id)).value

        first = await account_service.remove_token(view.id, token.token)
        second = await account_service.remove_token(view.id, token.token)

        assert isinstance(first, Success)
        assert isinstance(second, Success)
        assert isinstance(await account_service.authenticate(token.token), Failure)
        removed = event_bus.of_type(TokenRemoved)
        assert [event.revoked_count for event in removed] == [1, 0]

    async def test_cannot_remove_another_users_token(self, account_service, event_bus):
        owner = await signup_verified(account_service, event_bus)
        intruder = await signup_verified(account_service, event_bus)
        token = (await account_service.create_token(owner.id)).value

        result = await account_service.remove_token(intruder.id, token.token)

        assert result.error.code == ErrorCode.TOKEN_INVALID
        assert isinstance(await account_service.authenticate(token.token), Success)

    async def test_remove_family(self, account_service, event_bus):
        view = await signup_verified(account_service, event_bus)
        phone_a = (await account_service.create_token(view.id, "phone")).value
        phone_b = (await account_service.create_token(view.id, "phone")).value
        laptop = (await account_service.create_token(view.id, "laptop")).value

        result = await account_service.remove_token_family(view.id, "phone")

        assert result.value == 2
        assert isinstance(await account_service.authenticate(phone_a.token), Failure)
        assert isinstance(await account_service.authenticate(phone_b.token), Failure)
        assert isinstance(await account_service.authenticate(laptop.token), Success)

    async def test_remove_unknown_family_counts_zero(self, account_service, event_bus):
        view = await signup_verified(account_service, event_bus)

        result = await account_service.remove_token_family(view.id, "never-used")

        assert result.value == 0

    async def test_list_tokens_hides_values(self, account_service, event_bus, clock):
        view = await signup_verified(account_service, event_bus)
        first = (await account_service.create_token(view.id, "a")).value
        clock.advance(minutes=1)
        second = (await account_service.create_token(view.id, "b")).value
        await account_service.remove_token(view.id, first.token)

        result = await account_service.list_tokens(view.id)

        assert [summary.token_id for summary in result.value] == [second.token_id]
        assert not hasattr(result.value[0], "token")
