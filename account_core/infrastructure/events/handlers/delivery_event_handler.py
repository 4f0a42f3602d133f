"""Delivery event handler.

Turns code-bearing account events into EmailDeliveryProtocol calls. Runs
after the unit of work has committed, so a slow or failing mail provider
never blocks or rolls back the state change; the user can always ask for a
resend.

Each delivery call is bounded by Settings.delivery_timeout_seconds.

Usage:
    >>> handler = DeliveryEventHandler(
    ...     email_service=get_email_service(),
    ...     logger=get_logger(),
    ...     timeout_seconds=settings.delivery_timeout_seconds,
    ... )
    >>> handler.register(event_bus)
"""

import asyncio
from collections.abc import Awaitable

from account_core.domain.events import (
    EmailChangeRequested,
    PasswordResetRequested,
    UserSignedUp,
    VerificationMailResent,
)
from account_core.domain.protocols import (
    EmailDeliveryProtocol,
    EventBusProtocol,
    LoggerProtocol,
)


class DeliveryEventHandler:
    """Sends verification, forgot-password and change-email mails.

    Timeouts are logged here; any other delivery exception propagates to
    the event bus, which logs it (fail-open).
    """

    def __init__(
        self,
        email_service: EmailDeliveryProtocol,
        logger: LoggerProtocol,
        timeout_seconds: float = 5.0,
    ) -> None:
        """Initialize handler.

        Args:
            email_service: Delivery adapter.
            logger: Structured logger.
            timeout_seconds: Upper bound per delivery call.
        """
        self._email_service = email_service
        self._logger = logger
        self._timeout_seconds = timeout_seconds

    def register(self, event_bus: EventBusProtocol) -> None:
        """Subscribe every handler method to its event."""
        event_bus.subscribe(UserSignedUp, self.handle_user_signed_up)
        event_bus.subscribe(VerificationMailResent, self.handle_verification_mail_resent)
        event_bus.subscribe(PasswordResetRequested, self.handle_password_reset_requested)
        event_bus.subscribe(EmailChangeRequested, self.handle_email_change_requested)

    async def _deliver(self, template: str, call: Awaitable[None], **context: str) -> None:
        try:
            await asyncio.wait_for(call, timeout=self._timeout_seconds)
        except TimeoutError as e:
            self._logger.warning(
                "email_delivery_timed_out",
                error=e,
                template=template,
                timeout_seconds=self._timeout_seconds,
                **context,
            )
            return
        self._logger.debug("email_delivered", template=template, **context)

    async def handle_user_signed_up(self, event: UserSignedUp) -> None:
        await self._deliver(
            "verification",
            self._email_service.send_verification(event.email, event.code),
            user_id=str(event.user_id),
        )

    async def handle_verification_mail_resent(self, event: VerificationMailResent) -> None:
        await self._deliver(
            "verification",
            self._email_service.send_verification(event.email, event.code),
            user_id=str(event.user_id),
        )

    async def handle_password_reset_requested(self, event: PasswordResetRequested) -> None:
        await self._deliver(
            "forgot_password",
            self._email_service.send_forgot_password(event.email, event.code),
            user_id=str(event.user_id),
        )

    async def handle_email_change_requested(self, event: EmailChangeRequested) -> None:
        await self._deliver(
            "change_email",
            self._email_service.send_change_email(event.new_email, event.code),
            user_id=str(event.user_id),
        )
