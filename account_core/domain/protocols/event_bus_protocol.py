"""Event bus protocol (port) for domain events.

Implementations:
    - InMemoryEventBus: account_core/infrastructure/events/in_memory_event_bus.py

Key Requirements:
    1. Fail-open: one handler failure must NOT prevent other handlers from
       executing, and never propagates to the publisher.
    2. Async handlers.
    3. Exact type routing (no inheritance matching).
"""

from collections.abc import Awaitable, Callable
from typing import Protocol

from account_core.domain.events.base_event import DomainEvent

EventHandler = Callable[[DomainEvent], Awaitable[None]]
"""Async event handler: takes one event, returns None."""


class EventBusProtocol(Protocol):
    """Protocol for event bus implementations."""

    def subscribe(
        self,
        event_type: type[DomainEvent],
        handler: EventHandler,
    ) -> None:
        """Register handler for an exact event type."""
        ...

    async def publish(self, event: DomainEvent) -> None:
        """Run every handler registered for type(event). Never raises."""
        ...
