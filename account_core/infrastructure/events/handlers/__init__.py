"""Domain event handlers."""

from account_core.infrastructure.events.handlers.delivery_event_handler import (
    DeliveryEventHandler,
)

__all__ = ["DeliveryEventHandler"]
