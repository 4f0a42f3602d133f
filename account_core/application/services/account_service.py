"""Account use-case orchestration.

AccountService is the single entry point a transport layer calls. Each
use-case:

    1. Validates its input (typed requests, plain-string validators)
    2. Opens one unit of work from the store factory
    3. Loads the user explicitly (NotFound when absent)
    4. Asks AccountStateMachine whether the operation is legal
    5. Calls CodeGenerator, CredentialVault or TokenIssuer
    6. Commits (leaving the unit of work without commit rolls back)
    7. Publishes domain events (delivery happens from events)
    8. Returns Result[UserView | TokenDescriptor | None, DomainError]

Errors are returned as Failure values, never raised. Store conflicts raised
by repositories (unique constraints, optimistic version) are translated into
DuplicateEmail or ValidationFailed.

Usage:
    from account_core.core.container import get_account_service

    service = get_account_service()
    match await service.signup("a@example.com", "SecurePass123!"):
        case Success(value=user_view):
            ...
        case Failure(error=error):
            ...
"""

from collections.abc import Mapping
from typing import Any
from uuid import UUID

from pydantic import ValidationError as PydanticValidationError
from uuid_extensions import uuid7

from account_core.application.dtos import (
    SignupRequest,
    TokenDescriptor,
    TokenSummary,
    UpdateUserRequest,
    UserView,
)
from account_core.application.services.code_generator import CodeGenerator, CodePolicy
from account_core.application.services.token_issuer import TokenIssuer
from account_core.core.clock import Clock, utc_now
from account_core.core.config import Settings
from account_core.core.constants import SECRET_PREVIEW_LENGTH
from account_core.core.errors import DomainError
from account_core.core.result import Failure, Result, Success
from account_core.domain.account_state_machine import (
    AccountOperation,
    AccountStateMachine,
)
from account_core.domain.entities import User
from account_core.domain.enums import AccountState, CodePurpose, UserRole
from account_core.domain.errors import (
    AccountError,
    DuplicateRecordError,
    StoreConflict,
    bad_credentials,
    duplicate_email,
    invalid_or_expired_code,
    invalid_token,
    user_not_found,
    validation_failed,
    weak_password,
)
from account_core.domain.events import (
    DomainEvent,
    EmailChangeCancelled,
    EmailChanged,
    EmailChangeRequested,
    PasswordChanged,
    PasswordResetCompleted,
    PasswordResetRequested,
    TokenCreated,
    TokenRemoved,
    UserSignedUp,
    UserUpdated,
    UserVerified,
    VerificationMailResent,
)
from account_core.domain.protocols import (
    AccountStore,
    AccountStoreFactory,
    EventBusProtocol,
    LoggerProtocol,
    PasswordHashingProtocol,
)
from account_core.domain.validators import (
    normalize_email,
    validate_email,
    validate_strong_password,
    validate_token_family,
)

# Revocation reasons recorded on tokens
REASON_PASSWORD_RESET = "password_reset"
REASON_REMOVED = "removed"
REASON_FAMILY_REMOVED = "family_removed"


def _preview(secret: str) -> str:
    return secret[:SECRET_PREVIEW_LENGTH]


def _request_error(exc: PydanticValidationError) -> DomainError:
    """Map the first pydantic error of a request to a DomainError."""
    first = exc.errors()[0]
    field = ".".join(str(part) for part in first["loc"]) or None
    if field == "password":
        return weak_password(first["msg"])
    return validation_failed(first["msg"], field=field)


def _conflict_error(exc: StoreConflict) -> DomainError:
    """Map a store conflict to the invariant it protects."""
    if isinstance(exc, DuplicateRecordError) and exc.field in ("email", "pending_email"):
        return duplicate_email()
    if isinstance(exc, DuplicateRecordError):
        return validation_failed(
            "A concurrent request issued a code at the same time, retry",
            field=exc.field,
        )
    return validation_failed(AccountError.CONCURRENT_UPDATE, field="version")


class AccountService:
    """Account lifecycle and authentication use-cases.

    Constructed once at process start by the container and shared by all
    request handlers. Holds no per-request state.
    """

    def __init__(
        self,
        store_factory: AccountStoreFactory,
        password_service: PasswordHashingProtocol,
        event_bus: EventBusProtocol,
        logger: LoggerProtocol,
        settings: Settings,
        clock: Clock = utc_now,
    ) -> None:
        """Initialize service with its collaborators.

        Args:
            store_factory: Opens a unit of work (AccountStore).
            password_service: Credential vault.
            event_bus: Receives domain events after commit.
            logger: Structured logger.
            settings: Code lifetimes, token lifetime, default family.
            clock: Time source shared with code and token services.
        """
        self._store_factory = store_factory
        self._password_service = password_service
        self._event_bus = event_bus
        self._logger = logger
        self._settings = settings
        self._clock = clock
        self._code_policy = CodePolicy.from_settings(settings)

    # =========================================================================
    # Helpers
    # =========================================================================

    def _codes(self, store: AccountStore) -> CodeGenerator:
        return CodeGenerator(store.codes, self._code_policy, self._clock)

    def _tokens(self, store: AccountStore) -> TokenIssuer:
        return TokenIssuer(store.tokens, self._settings.token_expire_days, self._clock)

    async def _load_user(
        self,
        store: AccountStore,
        user_id: UUID,
    ) -> Result[User, DomainError]:
        user = await store.users.find_by_id(user_id)
        if user is None:
            return Failure(error=user_not_found(user_id))
        return Success(value=user)

    async def _email_taken(
        self,
        store: AccountStore,
        email: str,
        owner_id: UUID | None = None,
    ) -> bool:
        """True if email is a primary or live pending address of another user.

        A pending address whose change-email code is no longer usable is
        released in the current unit of work and does not count.
        """
        holder = await store.users.find_by_email(email)
        if holder is not None and holder.id != owner_id:
            return True
        pending_holder = await store.users.find_by_pending_email(email)
        if pending_holder is None or pending_holder.id == owner_id:
            return False

        now = self._clock()
        active = await store.codes.find_active(
            pending_holder.id, CodePurpose.CHANGE_EMAIL
        )
        if active is not None and active.payload == email and active.is_usable(now):
            return True

        try:
            await self._clear_pending_email(store, pending_holder)
        except StoreConflict as e:
            self._logger.info(
                "stale_pending_email_release_conflict",
                user_id=str(pending_holder.id),
                conflict=type(e).__name__,
            )
            return True
        self._logger.info(
            "stale_pending_email_released", user_id=str(pending_holder.id)
        )
        return False

    async def _clear_pending_email(self, store: AccountStore, user: User) -> None:
        """Drop user's pending address and retire its change-email code."""
        now = self._clock()
        await store.codes.supersede_active(user.id, CodePurpose.CHANGE_EMAIL, now)
        user.pending_email = None
        user.updated_at = now
        await store.users.update(user)

    async def _publish(self, *events: DomainEvent) -> None:
        for event in events:
            await self._event_bus.publish(event)

    # =========================================================================
    # Signup and verification
    # =========================================================================

    async def signup(
        self,
        email: str,
        password: str,
        display_name: str | None = None,
    ) -> Result[UserView, DomainError]:
        """Register a new UNVERIFIED user and send a verification code.

        Returns:
            Success(UserView), or Failure with DuplicateEmail, WeakPassword or
            ValidationFailed.
        """
        # Step 1: Validate input
        try:
            request = SignupRequest(
                email=email, password=password, display_name=display_name
            )
        except PydanticValidationError as e:
            return Failure(error=_request_error(e))

        # Step 2: Hash outside the unit of work
        password_hash = self._password_service.hash_password(request.password)

        async with self._store_factory() as store:
            # Step 3: Fast uniqueness check (the unique constraint is authoritative)
            if await self._email_taken(store, request.email):
                self._logger.info("signup_rejected_duplicate_email")
                return Failure(error=duplicate_email())

            # Step 4: Create user and signup code
            now = self._clock()
            user = User(
                id=uuid7(),
                email=request.email,
                password_hash=password_hash,
                state=AccountState.UNVERIFIED,
                roles={UserRole.USER},
                display_name=request.display_name,
                created_at=now,
                updated_at=now,
            )
            try:
                await store.users.save(user)
                code = await self._codes(store).issue(
                    user.id, CodePurpose.SIGNUP_VERIFICATION
                )
                await store.commit()
            except StoreConflict as e:
                self._logger.info("signup_conflict", conflict=type(e).__name__)
                return Failure(error=_conflict_error(e))

        # Step 5: Deliver after commit
        self._logger.info(
            "user_signed_up",
            user_id=str(user.id),
            code_preview=_preview(code.code),
        )
        await self._publish(
            UserSignedUp(user_id=user.id, email=user.email, code=code.code)
        )
        return Success(value=UserView.from_entity(user))

    async def resend_verification_mail(
        self,
        user_id: UUID,
    ) -> Result[UserView, DomainError]:
        """Re-issue the signup code. No-op for an already verified user."""
        async with self._store_factory() as store:
            loaded = await self._load_user(store, user_id)
            if isinstance(loaded, Failure):
                return loaded
            user = loaded.value

            allowed = AccountStateMachine.ensure_allowed(
                user, AccountOperation.RESEND_VERIFICATION
            )
            if isinstance(allowed, Failure):
                return allowed

            if not AccountStateMachine.needs_verification(user):
                self._logger.debug("verification_resend_skipped", user_id=str(user.id))
                return Success(value=UserView.from_entity(user))

            try:
                code = await self._codes(store).issue(
                    user.id, CodePurpose.SIGNUP_VERIFICATION
                )
                await store.commit()
            except StoreConflict as e:
                return Failure(error=_conflict_error(e))

        self._logger.info("verification_mail_resent", user_id=str(user.id))
        await self._publish(
            VerificationMailResent(user_id=user.id, email=user.email, code=code.code)
        )
        return Success(value=UserView.from_entity(user))

    async def verify_user(self, code: str) -> Result[UserView, DomainError]:
        """Consume a signup code and move its user UNVERIFIED -> VERIFIED."""
        async with self._store_factory() as store:
            # Step 1: Consume atomically (rolled back if a later step fails)
            consumed = await self._codes(store).consume(
                code, CodePurpose.SIGNUP_VERIFICATION
            )
            if isinstance(consumed, Failure):
                self._logger.info("verification_failed", code_preview=_preview(code))
                return consumed

            user = await store.users.find_by_id(consumed.value.user_id)
            if user is None:
                return Failure(error=invalid_or_expired_code())

            # Step 2: Transition
            verified = AccountStateMachine.verify(user)
            if isinstance(verified, Failure):
                return verified

            user.updated_at = self._clock()
            try:
                await store.users.update(user)
                await store.commit()
            except StoreConflict as e:
                return Failure(error=_conflict_error(e))

        self._logger.info("user_verified", user_id=str(user.id))
        await self._publish(UserVerified(user_id=user.id, email=user.email))
        return Success(value=UserView.from_entity(user))

    # =========================================================================
    # Passwords
    # =========================================================================

    async def forgot_password(self, email: str) -> Result[None, DomainError]:
        """Send a forgot-password code if the address belongs to a user.

        Always succeeds, whether or not the address is registered, so the
        outcome never reveals which addresses exist.
        """
        normalized = normalize_email(email)
        async with self._store_factory() as store:
            user = await store.users.find_by_email(normalized)
            if user is None:
                self._logger.debug("forgot_password_unknown_email")
                return Success(value=None)

            allowed = AccountStateMachine.ensure_allowed(
                user, AccountOperation.FORGOT_PASSWORD
            )
            if isinstance(allowed, Failure):
                self._logger.info("forgot_password_refused", user_id=str(user.id))
                return Success(value=None)

            try:
                code = await self._codes(store).issue(
                    user.id, CodePurpose.FORGOT_PASSWORD
                )
                await store.commit()
            except StoreConflict as e:
                self._logger.warning(
                    "forgot_password_conflict",
                    user_id=str(user.id),
                    conflict=type(e).__name__,
                )
                return Success(value=None)

        self._logger.info("password_reset_requested", user_id=str(user.id))
        await self._publish(
            PasswordResetRequested(user_id=user.id, email=user.email, code=code.code)
        )
        return Success(value=None)

    async def reset_password(
        self,
        code: str,
        new_password: str,
    ) -> Result[None, DomainError]:
        """Replace the password through a forgot-password code.

        The code is checked before the password policy, so a consumed or
        expired code fails with InvalidOrExpiredCode whatever the password.
        Every token of the user is revoked.
        """
        async with self._store_factory() as store:
            codes = self._codes(store)

            # Step 1: Code must be usable
            peeked = await codes.peek(code, CodePurpose.FORGOT_PASSWORD)
            if isinstance(peeked, Failure):
                return peeked

            # Step 2: Password policy
            try:
                validate_strong_password(new_password)
            except ValueError as e:
                return Failure(error=weak_password(str(e)))

            # Step 3: Consume (exactly one concurrent reset gets past this)
            consumed = await codes.consume(code, CodePurpose.FORGOT_PASSWORD)
            if isinstance(consumed, Failure):
                return consumed

            user = await store.users.find_by_id(consumed.value.user_id)
            if user is None:
                return Failure(error=invalid_or_expired_code())

            allowed = AccountStateMachine.ensure_allowed(
                user, AccountOperation.RESET_PASSWORD
            )
            if isinstance(allowed, Failure):
                return allowed

            # Step 4: Replace hash and revoke sessions
            user.password_hash = self._password_service.hash_password(new_password)
            user.updated_at = self._clock()
            try:
                await store.users.update(user)
                revoked = await self._tokens(store).revoke_all(
                    user.id, REASON_PASSWORD_RESET
                )
                await store.commit()
            except StoreConflict as e:
                return Failure(error=_conflict_error(e))

        self._logger.info(
            "password_reset_completed",
            user_id=str(user.id),
            revoked_tokens=revoked,
        )
        await self._publish(
            PasswordResetCompleted(user_id=user.id, revoked_tokens=revoked)
        )
        return Success(value=None)

    async def change_password(
        self,
        user_id: UUID,
        old_password: str,
        new_password: str,
    ) -> Result[None, DomainError]:
        """Replace the password after checking the current one."""
        async with self._store_factory() as store:
            loaded = await self._load_user(store, user_id)
            if isinstance(loaded, Failure):
                return loaded
            user = loaded.value

            allowed = AccountStateMachine.ensure_allowed(
                user, AccountOperation.CHANGE_PASSWORD
            )
            if isinstance(allowed, Failure):
                return allowed

            if not self._password_service.verify_password(
                old_password, user.password_hash
            ):
                self._logger.info(
                    "password_change_bad_credentials", user_id=str(user.id)
                )
                return Failure(error=bad_credentials())

            try:
                validate_strong_password(new_password)
            except ValueError as e:
                return Failure(error=weak_password(str(e)))

            user.password_hash = self._password_service.hash_password(new_password)
            user.updated_at = self._clock()
            try:
                await store.users.update(user)
                await store.commit()
            except StoreConflict as e:
                return Failure(error=_conflict_error(e))

        self._logger.info("password_changed", user_id=str(user.id))
        await self._publish(PasswordChanged(user_id=user.id))
        return Success(value=None)

    # =========================================================================
    # Email change
    # =========================================================================

    async def request_email_change(
        self,
        user_id: UUID,
        new_email: str,
    ) -> Result[UserView, DomainError]:
        """Store new_email as pending and send a change-email code to it."""
        try:
            new_email = validate_email(new_email)
        except ValueError as e:
            return Failure(error=validation_failed(str(e), field="email"))

        async with self._store_factory() as store:
            loaded = await self._load_user(store, user_id)
            if isinstance(loaded, Failure):
                return loaded
            user = loaded.value

            allowed = AccountStateMachine.ensure_allowed(
                user, AccountOperation.REQUEST_EMAIL_CHANGE
            )
            if isinstance(allowed, Failure):
                return allowed

            if new_email == user.email or await self._email_taken(
                store, new_email, owner_id=user.id
            ):
                return Failure(error=duplicate_email())

            user.pending_email = new_email
            user.updated_at = self._clock()
            try:
                await store.users.update(user)
                code = await self._codes(store).issue(
                    user.id, CodePurpose.CHANGE_EMAIL, payload=new_email
                )
                await store.commit()
            except StoreConflict as e:
                return Failure(error=_conflict_error(e))

        self._logger.info("email_change_requested", user_id=str(user.id))
        await self._publish(
            EmailChangeRequested(user_id=user.id, new_email=new_email, code=code.code)
        )
        return Success(value=UserView.from_entity(user))

    async def change_email(self, code: str) -> Result[UserView, DomainError]:
        """Promote the pending address carried by a change-email code."""
        async with self._store_factory() as store:
            consumed = await self._codes(store).consume(code, CodePurpose.CHANGE_EMAIL)
            if isinstance(consumed, Failure):
                return consumed
            new_email = consumed.value.payload

            user = await store.users.find_by_id(consumed.value.user_id)
            if user is None or new_email is None:
                return Failure(error=invalid_or_expired_code())

            allowed = AccountStateMachine.ensure_allowed(
                user, AccountOperation.CONFIRM_EMAIL_CHANGE
            )
            if isinstance(allowed, Failure):
                return allowed

            # Pending address was replaced or cleared since the code was issued
            if user.pending_email != new_email:
                return Failure(error=invalid_or_expired_code())

            holder = await store.users.find_by_email(new_email)
            if holder is not None and holder.id != user.id:
                return Failure(error=duplicate_email())

            old_email = user.email
            user.email = new_email
            user.pending_email = None
            user.updated_at = self._clock()
            try:
                await store.users.update(user)
                await store.commit()
            except StoreConflict as e:
                return Failure(error=_conflict_error(e))

        self._logger.info("email_changed", user_id=str(user.id))
        await self._publish(
            EmailChanged(user_id=user.id, old_email=old_email, new_email=new_email)
        )
        return Success(value=UserView.from_entity(user))

    async def cancel_email_change(self, user_id: UUID) -> Result[UserView, DomainError]:
        """Withdraw a pending address. No-op when nothing is pending.

        The outstanding change-email code is superseded, so a mail already
        delivered can no longer confirm the change.
        """
        async with self._store_factory() as store:
            loaded = await self._load_user(store, user_id)
            if isinstance(loaded, Failure):
                return loaded
            user = loaded.value

            pending_email = user.pending_email
            if pending_email is None:
                return Success(value=UserView.from_entity(user))

            try:
                await self._clear_pending_email(store, user)
                await store.commit()
            except StoreConflict as e:
                return Failure(error=_conflict_error(e))

        self._logger.info("email_change_cancelled", user_id=str(user.id))
        await self._publish(
            EmailChangeCancelled(user_id=user.id, pending_email=pending_email)
        )
        return Success(value=UserView.from_entity(user))

    # =========================================================================
    # Tokens
    # =========================================================================

    async def create_token(
        self,
        user_id: UUID,
        family: str | None = None,
    ) -> Result[TokenDescriptor, DomainError]:
        """Issue a bearer token in family (default family when None)."""
        family = family if family is not None else self._settings.default_token_family
        try:
            validate_token_family(family)
        except ValueError as e:
            return Failure(error=validation_failed(str(e), field="family"))

        async with self._store_factory() as store:
            loaded = await self._load_user(store, user_id)
            if isinstance(loaded, Failure):
                return loaded
            user = loaded.value

            allowed = AccountStateMachine.ensure_allowed(
                user, AccountOperation.ISSUE_TOKEN
            )
            if isinstance(allowed, Failure):
                return allowed

            token, value = await self._tokens(store).issue(user.id, family)
            await store.commit()

        self._logger.info(
            "token_created",
            user_id=str(user.id),
            token_id=str(token.id),
            family=family,
        )
        await self._publish(
            TokenCreated(user_id=user.id, token_id=token.id, family=family)
        )
        return Success(
            value=TokenDescriptor(
                token=value,
                token_id=token.id,
                family=token.family,
                issued_at=token.issued_at,
                expires_at=token.expires_at,
            )
        )

    async def remove_token(
        self,
        user_id: UUID,
        token_value: str,
    ) -> Result[None, DomainError]:
        """Revoke one of the user's own tokens. Idempotent.

        A token that does not exist or belongs to someone else fails with
        InvalidToken.
        """
        async with self._store_factory() as store:
            loaded = await self._load_user(store, user_id)
            if isinstance(loaded, Failure):
                return loaded
            user = loaded.value

            issuer = self._tokens(store)
            token = await issuer.find(token_value)
            if token is None or token.user_id != user.id:
                self._logger.info("token_removal_refused", user_id=str(user.id))
                return Failure(error=invalid_token())

            revoked = await issuer.revoke_by_id(token.id, REASON_REMOVED)
            await store.commit()

        self._logger.info(
            "token_removed",
            user_id=str(user.id),
            token_id=str(token.id),
            already_revoked=not revoked,
        )
        await self._publish(
            TokenRemoved(
                user_id=user.id,
                family=token.family,
                revoked_count=1 if revoked else 0,
            )
        )
        return Success(value=None)

    async def remove_token_family(
        self,
        user_id: UUID,
        family: str,
    ) -> Result[int, DomainError]:
        """Revoke every active token of one family. Returns the count."""
        async with self._store_factory() as store:
            loaded = await self._load_user(store, user_id)
            if isinstance(loaded, Failure):
                return loaded
            user = loaded.value

            revoked = await self._tokens(store).revoke_family(
                user.id, family, REASON_FAMILY_REMOVED
            )
            await store.commit()

        self._logger.info(
            "token_family_removed",
            user_id=str(user.id),
            family=family,
            revoked_count=revoked,
        )
        await self._publish(
            TokenRemoved(user_id=user.id, family=family, revoked_count=revoked)
        )
        return Success(value=revoked)

    async def list_tokens(self, user_id: UUID) -> Result[list[TokenSummary], DomainError]:
        """Active tokens of a user, without their values."""
        async with self._store_factory() as store:
            loaded = await self._load_user(store, user_id)
            if isinstance(loaded, Failure):
                return loaded
            tokens = await self._tokens(store).list_active(loaded.value.id)
        return Success(value=[TokenSummary.from_entity(token) for token in tokens])

    async def authenticate(self, token_value: str) -> Result[UserView, DomainError]:
        """Resolve a bearer token to its (non-blocked) user."""
        async with self._store_factory() as store:
            authenticated = await self._tokens(store).authenticate(token_value)
            if isinstance(authenticated, Failure):
                return authenticated

            user = await store.users.find_by_id(authenticated.value.user_id)
            if user is None:
                return Failure(error=invalid_token())

        allowed = AccountStateMachine.ensure_allowed(user, AccountOperation.AUTHENTICATE)
        if isinstance(allowed, Failure):
            self._logger.info("blocked_user_token_rejected", user_id=str(user.id))
            return Failure(error=invalid_token())
        return Success(value=UserView.from_entity(user))

    # =========================================================================
    # Lookup and update
    # =========================================================================

    async def fetch_user(self, user_id: UUID) -> Result[UserView, DomainError]:
        """Load a user by id (NotFound when absent)."""
        async with self._store_factory() as store:
            loaded = await self._load_user(store, user_id)
        if isinstance(loaded, Failure):
            return loaded
        return Success(value=UserView.from_entity(loaded.value))

    async def fetch_user_by_email(self, email: str) -> Result[UserView, DomainError]:
        """Load a user by primary address (case-insensitive)."""
        normalized = normalize_email(email)
        async with self._store_factory() as store:
            user = await store.users.find_by_email(normalized)
        if user is None:
            return Failure(error=user_not_found(normalized))
        return Success(value=UserView.from_entity(user))

    async def update_user(
        self,
        user_id: UUID,
        request: UpdateUserRequest | Mapping[str, Any],
        actor_id: UUID,
    ) -> Result[UserView, DomainError]:
        """Apply a typed partial update.

        Rules:
            - Only display_name, roles and state are mutable
            - roles and state may only be changed by an admin actor
            - an admin cannot remove their own admin role or block themselves
            - state changes must be legal transitions (no downgrade)
            - a stale version (request or concurrent writer) is ValidationFailed

        Args:
            user_id: User to update.
            request: UpdateUserRequest, or a mapping validated into one.
            actor_id: User performing the update.
        """
        if not isinstance(request, UpdateUserRequest):
            try:
                request = UpdateUserRequest.model_validate(request)
            except PydanticValidationError as e:
                return Failure(error=_request_error(e))

        async with self._store_factory() as store:
            loaded = await self._load_user(store, user_id)
            if isinstance(loaded, Failure):
                return loaded
            user = loaded.value

            if actor_id == user.id:
                actor = user
            else:
                loaded_actor = await self._load_user(store, actor_id)
                if isinstance(loaded_actor, Failure):
                    return loaded_actor
                actor = loaded_actor.value

            if request.version is not None and request.version != user.version:
                return Failure(
                    error=validation_failed(
                        AccountError.CONCURRENT_UPDATE, field="version"
                    )
                )

            protected = request.protected_changes(user.roles, user.state)
            if protected and not actor.is_admin():
                return Failure(
                    error=validation_failed(
                        "Only administrators may change roles or state",
                        field=sorted(protected)[0],
                    )
                )

            changed: list[str] = []

            if (
                "display_name" in request.model_fields_set
                and request.display_name != user.display_name
            ):
                user.display_name = request.display_name
                changed.append("display_name")

            if request.roles is not None and request.roles != user.roles:
                if actor.id == user.id and UserRole.ADMIN not in request.roles:
                    return Failure(
                        error=validation_failed(
                            "Administrators cannot remove their own admin role",
                            field="roles",
                        )
                    )
                user.roles = set(request.roles)
                changed.append("roles")

            if request.state is not None and request.state != user.state:
                if actor.id == user.id and request.state == AccountState.BLOCKED:
                    return Failure(
                        error=validation_failed(
                            "Administrators cannot block themselves", field="state"
                        )
                    )
                transitioned = AccountStateMachine.transition(user, request.state)
                if isinstance(transitioned, Failure):
                    return transitioned
                changed.append("state")

            if not changed:
                return Success(value=UserView.from_entity(user))

            user.updated_at = self._clock()
            try:
                await store.users.update(user)
                await store.commit()
            except StoreConflict as e:
                self._logger.info("user_update_conflict", user_id=str(user.id))
                return Failure(error=_conflict_error(e))

        self._logger.info(
            "user_updated",
            user_id=str(user.id),
            actor_id=str(actor.id),
            changed_fields=changed,
        )
        await self._publish(
            UserUpdated(user_id=user.id, actor_id=actor.id, changed_fields=tuple(changed))
        )
        return Success(value=UserView.from_entity(user))
