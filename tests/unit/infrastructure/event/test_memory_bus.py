import pytest

from idproxy.domain.identity.event import IdentityCreated, OwnershipTransferred
from idproxy.domain.shared.event import Event
from idproxy.infrastructure.event.memory_bus import InMemoryEventBus


class TestInMemoryEventBus:
    def test_handlers_run_in_subscription_order(self) -> None:
        bus = InMemoryEventBus()
        seen: list[str] = []
        bus.subscribe(IdentityCreated, lambda e: seen.append("first"))
        bus.subscribe(IdentityCreated, lambda e: seen.append("second"))

        bus.publish(IdentityCreated(identity="i", owner="o"))

        assert seen == ["first", "second"]

    def test_only_matching_type_is_delivered(self) -> None:
        bus = InMemoryEventBus()
        seen: list[Event] = []
        bus.subscribe(OwnershipTransferred, seen.append)

        bus.publish(IdentityCreated(identity="i", owner="o"))

        assert seen == []

    def test_handler_error_propagates(self) -> None:
        bus = InMemoryEventBus()

        def explode(event: Event) -> None:
            raise RuntimeError("handler failed")

        bus.subscribe(IdentityCreated, explode)
        with pytest.raises(RuntimeError):
            bus.publish(IdentityCreated(identity="i", owner="o"))
