"""End-to-end and concurrency tests for AccountService.

Concurrent calls run through asyncio.gather against the in-memory store,
whose units of work are serialized like transactions on one row.

Tests cover:
- signup -> verify -> forgot -> reset, reset revokes earlier tokens
- email change round trip
- Exactly one winner when the same code is used concurrently
- Exactly one signup per address under concurrency
- Delivery failure never undoes the state change
"""

import asyncio
from unittest.mock import AsyncMock

import pytest

from account_core.core.enums import ErrorCode
from account_core.core.result import Failure, Success
from account_core.domain.enums import AccountState
from account_core.domain.events import (
    EmailChangeRequested,
    PasswordResetRequested,
    UserSignedUp,
)
from account_core.infrastructure.events.handlers import DeliveryEventHandler
from tests.utils.utils import STRONG_PASSWORD, last_code, signup, signup_verified

NEW_PASSWORD = "AnotherPass456#"


@pytest.mark.unit
class TestEndToEndFlows:
    """Full account lifecycles."""

    async def test_signup_verify_forgot_reset(
        self, account_service, event_bus, memory_database
    ):
        # Signup and verify
        view = await signup(account_service, "flow@example.com")
        verified = await account_service.verify_user(last_code(event_bus, UserSignedUp))
        assert verified.value.state == AccountState.VERIFIED

        # A session exists before the reset
        token = (await account_service.create_token(view.id, "phone")).value
        assert isinstance(await account_service.authenticate(token.token), Success)

        # Forgot and reset
        await account_service.forgot_password("flow@example.com")
        reset = await account_service.reset_password(
            last_code(event_bus, PasswordResetRequested), NEW_PASSWORD
        )
        assert isinstance(reset, Success)

        # Old session is gone, new password works
        assert isinstance(await account_service.authenticate(token.token), Failure)
        changed = await account_service.change_password(
            view.id, NEW_PASSWORD, STRONG_PASSWORD
        )
        assert isinstance(changed, Success)

    async def test_email_change_round_trip(self, account_service, event_bus):
        view = await signup_verified(account_service, event_bus, "before@example.com")

        await account_service.request_email_change(view.id, "after@example.com")
        result = await account_service.change_email(
            last_code(event_bus, EmailChangeRequested)
        )

        assert result.value.email == "after@example.com"
        second = await account_service.signup("before@example.com", STRONG_PASSWORD)
        assert isinstance(second, Success)


@pytest.mark.unit
class TestConcurrency:
    """Races on codes and unique addresses."""

    async def test_concurrent_verify_single_winner(self, account_service, event_bus):
        await signup(account_service)
        code = last_code(event_bus, UserSignedUp)

        results = await asyncio.gather(
            *(account_service.verify_user(code) for _ in range(5))
        )

        winners = [r for r in results if isinstance(r, Success)]
        losers = [r for r in results if isinstance(r, Failure)]
        assert len(winners) == 1
        assert all(r.error.code == ErrorCode.INVALID_OR_EXPIRED_CODE for r in losers)

    async def test_concurrent_reset_single_winner(self, account_service, event_bus):
        view = await signup_verified(account_service, event_bus)
        await account_service.forgot_password(view.email)
        code = last_code(event_bus, PasswordResetRequested)

        results = await asyncio.gather(
            account_service.reset_password(code, "FirstPass111!"),
            account_service.reset_password(code, "SecondPass222!"),
            account_service.reset_password(code, "ThirdPass333!"),
        )

        assert sum(isinstance(r, Success) for r in results) == 1

    async def test_concurrent_signup_same_address(self, account_service):
        results = await asyncio.gather(
            *(account_service.signup("race@example.com", STRONG_PASSWORD) for _ in range(4))
        )

        winners = [r for r in results if isinstance(r, Success)]
        losers = [r for r in results if isinstance(r, Failure)]
        assert len(winners) == 1
        assert all(r.error.code == ErrorCode.EMAIL_ALREADY_EXISTS for r in losers)

    async def test_concurrent_email_change_requests(self, account_service, event_bus):
        first = await signup_verified(account_service, event_bus)
        second = await signup_verified(account_service, event_bus)

        results = await asyncio.gather(
            account_service.request_email_change(first.id, "contested@example.com"),
            account_service.request_email_change(second.id, "contested@example.com"),
        )

        assert sum(isinstance(r, Success) for r in results) == 1


@pytest.mark.unit
class TestDeliveryIsolation:
    """Delivery problems never roll back account changes."""

    async def test_failing_delivery_keeps_user(
        self, account_service, event_bus, mock_logger
    ):
        # Arrange
        email_service = AsyncMock()
        email_service.send_verification.side_effect = ConnectionError("smtp down")
        DeliveryEventHandler(email_service, mock_logger).register(event_bus)

        # Act
        result = await account_service.signup("resilient@example.com", STRONG_PASSWORD)

        # Assert
        assert isinstance(result, Success)
        fetched = await account_service.fetch_user_by_email("resilient@example.com")
        assert isinstance(fetched, Success)
        email_service.send_verification.assert_awaited_once()
        assert mock_logger.warning.call_args.args == ("event_handler_failed",)
