"""In-process event bus for account events.

Handlers are keyed by the exact event class. Publishing runs every handler
for that class concurrently and isolates failures: a raising handler is
logged and skipped, the publisher never sees the exception. Account
operations have already committed by the time they publish, so a delivery
problem can never undo a state change.
"""

import asyncio

from account_core.domain.events.base_event import DomainEvent
from account_core.domain.protocols.event_bus_protocol import EventHandler
from account_core.domain.protocols.logger_protocol import LoggerProtocol


def _handler_name(handler: EventHandler) -> str:
    return getattr(handler, "__name__", None) or repr(handler)


class InMemoryEventBus:
    """Single-process event bus.

    Not thread-safe; intended for one event loop.
    """

    def __init__(self, logger: LoggerProtocol) -> None:
        self._logger = logger
        self._subscriptions: dict[type[DomainEvent], list[EventHandler]] = {}

    def subscribe(
        self,
        event_type: type[DomainEvent],
        handler: EventHandler,
    ) -> None:
        """Add ``handler`` for events whose class is exactly ``event_type``."""
        self._subscriptions.setdefault(event_type, []).append(handler)

    def handler_count(self, event_type: type[DomainEvent]) -> int:
        return len(self._subscriptions.get(event_type, ()))

    async def publish(self, event: DomainEvent) -> None:
        """Deliver ``event`` to its handlers. Never raises."""
        handlers = tuple(self._subscriptions.get(type(event), ()))
        if not handlers:
            return

        event_name = type(event).__name__
        self._logger.debug(
            "event_publishing",
            event_type=event_name,
            event_id=str(event.event_id),
            handler_count=len(handlers),
        )
        await asyncio.gather(*(self._dispatch(h, event, event_name) for h in handlers))

    async def _dispatch(
        self, handler: EventHandler, event: DomainEvent, event_name: str
    ) -> None:
        try:
            await handler(event)
        except Exception as exc:
            self._logger.warning(
                "event_handler_failed",
                error=exc,
                event_type=event_name,
                event_id=str(event.event_id),
                handler_name=_handler_name(handler),
            )
