"""Logging email delivery stub.

Implements EmailDeliveryProtocol by logging that a mail would be sent. Codes
appear only as previews. Swap for a real provider adapter (SES, SendGrid)
behind the same protocol.
"""

from account_core.core.constants import SECRET_PREVIEW_LENGTH
from account_core.domain.protocols import LoggerProtocol


class StubEmailService:
    """Email delivery that only logs.

    Example:
        >>> service = StubEmailService(logger=get_logger())
        >>> await service.send_verification("user@example.com", code)
        >>> # Log output: {"event": "email_would_be_sent", "template": "verification", ...}
    """

    def __init__(self, logger: LoggerProtocol) -> None:
        self._logger = logger

    def _log(self, template: str, recipient: str, code: str) -> None:
        self._logger.info(
            "email_would_be_sent",
            template=template,
            recipient=recipient,
            code_preview=code[:SECRET_PREVIEW_LENGTH],
        )

    async def send_verification(self, email: str, code: str) -> None:
        self._log("verification", email, code)

    async def send_forgot_password(self, email: str, code: str) -> None:
        self._log("forgot_password", email, code)

    async def send_change_email(self, new_email: str, code: str) -> None:
        self._log("change_email", new_email, code)
