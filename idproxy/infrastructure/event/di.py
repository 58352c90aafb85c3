from dishka import Provider, Scope, provide

from idproxy.domain.shared.port.event_bus import EventBus
from idproxy.infrastructure.event.memory_bus import InMemoryEventBus


class EventProvider(Provider):
    event_bus = provide(InMemoryEventBus, scope=Scope.APP, provides=EventBus)
