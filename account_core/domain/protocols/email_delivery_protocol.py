"""Email delivery protocol.

Delivery is fire-and-forget from the account core's point of view: it is
invoked from event handlers after the state change has committed, and a
failure here never rolls anything back.
"""

from typing import Protocol


class EmailDeliveryProtocol(Protocol):
    """Sends code-bearing account mails."""

    async def send_verification(self, email: str, code: str) -> None:
        """Send the signup verification code to email."""
        ...

    async def send_forgot_password(self, email: str, code: str) -> None:
        """Send the forgot-password code to email."""
        ...

    async def send_change_email(self, new_email: str, code: str) -> None:
        """Send the change-email code to the NEW address."""
        ...
