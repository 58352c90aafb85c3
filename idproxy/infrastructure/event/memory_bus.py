import logging
from collections import defaultdict
from collections.abc import Callable

from idproxy.domain.shared.event import Event
from idproxy.domain.shared.port.event_bus import EventBus

logger = logging.getLogger(__name__)

EventHandlerFunc = Callable[[Event], None]


class InMemoryEventBus(EventBus):
    def __init__(self) -> None:
        self._subscribers: dict[type[Event], list[EventHandlerFunc]] = defaultdict(list)

    def subscribe(self, event_type: type[Event], handler: EventHandlerFunc) -> None:
        self._subscribers[event_type].append(handler)

    def publish(self, event: Event) -> None:
        event_type = type(event)
        handlers = self._subscribers.get(event_type, [])

        if not handlers:
            logger.debug("No handlers for event %s", event_type.__name__)
            return

        logger.debug("Publishing event %s to %d handlers", event_type.__name__, len(handlers))

        # Handlers run in subscription order; a raising handler stops the chain.
        for handler in handlers:
            handler(event)
