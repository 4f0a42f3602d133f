"""Integration tests for AccountService over the SQLAlchemy store.

Runs the main account flows against SQLite (aiosqlite) so the conditional
statements, unique indexes and transaction handling are exercised for real.
"""

import pytest

from account_core.core.enums import ErrorCode
from account_core.core.result import Failure, Success
from account_core.domain.enums import AccountState
from account_core.domain.events import (
    EmailChangeRequested,
    PasswordResetRequested,
    UserSignedUp,
)
from tests.utils.utils import STRONG_PASSWORD, last_code

NEW_PASSWORD = "AnotherPass456#"


@pytest.mark.integration
class TestAccountServiceOnSqlAlchemy:
    """Account flows against a real database."""

    async def test_signup_verify_reset_flow(self, sql_account_service, event_bus):
        service = sql_account_service

        signed_up = await service.signup("Flow@Example.com", STRONG_PASSWORD)
        assert isinstance(signed_up, Success)
        user_id = signed_up.value.id

        verified = await service.verify_user(last_code(event_bus, UserSignedUp))
        assert verified.value.state == AccountState.VERIFIED

        token = (await service.create_token(user_id, "phone")).value
        assert (await service.authenticate(token.token)).value.id == user_id

        await service.forgot_password("flow@example.com")
        code = last_code(event_bus, PasswordResetRequested)
        assert isinstance(await service.reset_password(code, NEW_PASSWORD), Success)

        replay = await service.reset_password(code, NEW_PASSWORD)
        assert replay.error.code == ErrorCode.INVALID_OR_EXPIRED_CODE
        assert isinstance(await service.authenticate(token.token), Failure)

    async def test_duplicate_signup(self, sql_account_service):
        await sql_account_service.signup("dup@example.com", STRONG_PASSWORD)

        result = await sql_account_service.signup("DUP@example.com", STRONG_PASSWORD)

        assert result.error.code == ErrorCode.EMAIL_ALREADY_EXISTS

    async def test_resend_supersedes(self, sql_account_service, event_bus):
        view = (await sql_account_service.signup("a@example.com", STRONG_PASSWORD)).value
        first = last_code(event_bus, UserSignedUp)

        await sql_account_service.resend_verification_mail(view.id)

        stale = await sql_account_service.verify_user(first)
        assert stale.error.code == ErrorCode.INVALID_OR_EXPIRED_CODE

    async def test_email_change(self, sql_account_service, event_bus):
        service = sql_account_service
        view = (await service.signup("old@example.com", STRONG_PASSWORD)).value
        await service.verify_user(last_code(event_bus, UserSignedUp))

        requested = await service.request_email_change(view.id, "new@example.com")
        assert requested.value.pending_email == "new@example.com"

        changed = await service.change_email(last_code(event_bus, EmailChangeRequested))

        assert changed.value.email == "new@example.com"
        assert changed.value.pending_email is None

    async def test_lapsed_pending_address_is_released(
        self, sql_account_service, event_bus, clock
    ):
        service = sql_account_service
        holder = (await service.signup("holder@example.com", STRONG_PASSWORD)).value
        await service.verify_user(last_code(event_bus, UserSignedUp))
        await service.request_email_change(holder.id, "victim@example.com")
        clock.advance(days=30)

        signed_up = await service.signup("victim@example.com", STRONG_PASSWORD)

        assert isinstance(signed_up, Success)
        assert (await service.fetch_user(holder.id)).value.pending_email is None

    async def test_cancel_email_change(self, sql_account_service, event_bus):
        service = sql_account_service
        view = (await service.signup("keep@example.com", STRONG_PASSWORD)).value
        await service.verify_user(last_code(event_bus, UserSignedUp))
        await service.request_email_change(view.id, "gone@example.com")

        cancelled = await service.cancel_email_change(view.id)
        confirmed = await service.change_email(
            last_code(event_bus, EmailChangeRequested)
        )

        assert cancelled.value.pending_email is None
        assert confirmed.error.code == ErrorCode.INVALID_OR_EXPIRED_CODE

    async def test_token_family_removal(self, sql_account_service):
        view = (
            await sql_account_service.signup("t@example.com", STRONG_PASSWORD)
        ).value
        await sql_account_service.create_token(view.id, "phone")
        await sql_account_service.create_token(view.id, "phone")
        laptop = (await sql_account_service.create_token(view.id, "laptop")).value

        removed = await sql_account_service.remove_token_family(view.id, "phone")
        listed = await sql_account_service.list_tokens(view.id)

        assert removed.value == 2
        assert [summary.token_id for summary in listed.value] == [laptop.token_id]

    async def test_stale_version_update(self, sql_account_service):
        view = (
            await sql_account_service.signup("v@example.com", STRONG_PASSWORD)
        ).value
        await sql_account_service.update_user(view.id, {"display_name": "One"}, view.id)

        result = await sql_account_service.update_user(
            view.id, {"display_name": "Two", "version": 1}, view.id
        )

        assert result.error.field == "version"
