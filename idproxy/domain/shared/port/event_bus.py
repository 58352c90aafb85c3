from abc import abstractmethod
from collections.abc import Callable
from typing import Protocol

from idproxy.domain.shared.event import Event


class EventBus(Protocol):
    @abstractmethod
    def publish(self, event: Event) -> None: ...

    @abstractmethod
    def subscribe(self, event_type: type[Event], handler: Callable[[Event], None]) -> None: ...
