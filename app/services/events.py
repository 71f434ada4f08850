"""In-process publish/subscribe for pushed log events."""

import inspect
import logging
from typing import Any, Callable

logger = logging.getLogger(__name__)

LOG_CREATED = "log_created"

Handler = Callable[[Any], Any]


class EventBus:
    """Registry of listeners per event type.

    Handlers may be plain functions or coroutine functions. Delivery order is
    unspecified, and a listener subscribed while an event is being delivered
    does not receive that event.
    """

    def __init__(self):
        self._handlers: dict[str, list[Handler]] = {}

    def subscribe(self, event_type: str, handler: Handler) -> Callable[[], None]:
        """Register a handler. Returns a callable that unsubscribes it."""
        self._handlers.setdefault(event_type, []).append(handler)
        logger.debug(f"Subscribed handler to {event_type}")

        def unsubscribe() -> None:
            self.unsubscribe(event_type, handler)

        return unsubscribe

    def unsubscribe(self, event_type: str, handler: Handler) -> None:
        """Remove a handler. No-op if it isn't registered."""
        handlers = self._handlers.get(event_type, [])
        if handler in handlers:
            handlers.remove(handler)
            logger.debug(f"Unsubscribed handler from {event_type}")

    async def publish(self, event_type: str, payload: Any) -> None:
        """Deliver a payload to every handler registered for the event type."""
        for handler in list(self._handlers.get(event_type, [])):
            try:
                result = handler(payload)
                if inspect.isawaitable(result):
                    await result
            except Exception as e:
                logger.error(f"Handler for {event_type} failed: {e}")
