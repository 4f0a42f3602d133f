"""Email delivery adapters."""

from account_core.infrastructure.email.stub_email_service import StubEmailService

__all__ = ["StubEmailService"]
