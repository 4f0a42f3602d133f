"""Unit tests for User, VerificationCode and Token entities."""

from datetime import UTC, datetime, timedelta

import pytest
from freezegun import freeze_time
from uuid_extensions import uuid7

from account_core.domain.entities import Token, User, VerificationCode
from account_core.domain.enums import AccountState, CodePurpose, UserRole

NOW = datetime(2026, 1, 15, 12, 0, tzinfo=UTC)


@pytest.mark.unit
class TestUserEntity:
    """Test User helpers and projection."""

    def _user(self, **overrides) -> User:
        values = {
            "id": uuid7(),
            "email": "user@example.com",
            "password_hash": "$2b$12$secret",
            "state": AccountState.VERIFIED,
            "created_at": NOW,
            "updated_at": NOW,
        }
        values.update(overrides)
        return User(**values)

    def test_defaults(self):
        user = self._user()

        assert user.roles == {UserRole.USER}
        assert user.version == 1
        assert user.pending_email is None
        assert not user.is_admin()

    def test_default_roles_not_shared_between_instances(self):
        first = self._user()
        second = self._user()

        first.roles.add(UserRole.ADMIN)

        assert second.roles == {UserRole.USER}

    def test_to_public_hides_hash_and_version(self):
        user = self._user(roles={UserRole.USER, UserRole.ADMIN}, display_name="Ada")

        public = user.to_public()

        assert "password_hash" not in public
        assert "version" not in public
        assert public["roles"] == ["admin", "user"]
        assert public["display_name"] == "Ada"

    def test_state_helpers(self):
        assert self._user(state=AccountState.VERIFIED).is_verified()
        assert self._user(state=AccountState.BLOCKED).is_blocked()
        assert not self._user(state=AccountState.UNVERIFIED).is_verified()


@pytest.mark.unit
class TestVerificationCodeEntity:
    """Test code usability."""

    def _code(self, **overrides) -> VerificationCode:
        values = {
            "id": uuid7(),
            "code": "abc",
            "purpose": CodePurpose.SIGNUP_VERIFICATION,
            "user_id": uuid7(),
            "issued_at": NOW,
            "expires_at": NOW + timedelta(hours=1),
        }
        values.update(overrides)
        return VerificationCode(**values)

    def test_fresh_code_is_usable(self):
        assert self._code().is_usable(NOW)

    def test_expiry_boundary_is_exclusive(self):
        code = self._code()

        assert code.is_usable(NOW + timedelta(minutes=59))
        assert code.is_expired(NOW + timedelta(hours=1))
        assert not code.is_usable(NOW + timedelta(hours=1))

    def test_consumed_code_is_not_usable(self):
        assert not self._code(consumed_at=NOW).is_usable(NOW)

    def test_superseded_code_is_not_usable(self):
        assert not self._code(superseded_at=NOW).is_usable(NOW)

    @freeze_time("2026-01-15 14:00:00")
    def test_is_expired_defaults_to_current_time(self):
        assert self._code().is_expired()


@pytest.mark.unit
class TestTokenEntity:
    """Test token validity."""

    def _token(self, **overrides) -> Token:
        values = {
            "id": uuid7(),
            "user_id": uuid7(),
            "family": "default",
            "token_digest": "0" * 64,
            "issued_at": NOW,
            "expires_at": NOW + timedelta(days=30),
        }
        values.update(overrides)
        return Token(**values)

    def test_active_token_is_valid(self):
        assert self._token().is_valid(NOW)

    def test_revoked_token_is_invalid(self):
        token = self._token(revoked_at=NOW, revoked_reason="removed")

        assert token.is_revoked()
        assert not token.is_valid(NOW)

    def test_expired_token_is_invalid(self):
        assert not self._token().is_valid(NOW + timedelta(days=30))

    def test_non_expiring_token_never_expires(self):
        token = self._token(expires_at=None)

        assert not token.is_expired(NOW + timedelta(days=3650))
