from dishka import Provider, Scope, provide

from idproxy.domain.identity.port.dispatcher import CallDispatcher
from idproxy.domain.identity.port.ownership_registry import OwnershipRegistry
from idproxy.infrastructure.registry.claims import ClaimRegistry
from idproxy.infrastructure.registry.ownership import InMemoryOwnershipRegistry
from idproxy.infrastructure.target.address_space import AddressSpace


class TargetProvider(Provider):
    """The address space and the registries living in it."""

    @provide(scope=Scope.APP)
    def get_address_space(self) -> AddressSpace:
        return AddressSpace()

    @provide(scope=Scope.APP)
    def get_dispatcher(self, address_space: AddressSpace) -> CallDispatcher:
        return address_space

    @provide(scope=Scope.APP)
    def get_ownership_registry(self, address_space: AddressSpace) -> InMemoryOwnershipRegistry:
        registry = InMemoryOwnershipRegistry()
        address_space.register(registry)
        return registry

    @provide(scope=Scope.APP)
    def get_ownership_registry_port(self, registry: InMemoryOwnershipRegistry) -> OwnershipRegistry:
        return registry

    @provide(scope=Scope.APP)
    def get_claim_registry(self, address_space: AddressSpace) -> ClaimRegistry:
        registry = ClaimRegistry()
        address_space.register(registry)
        return registry
