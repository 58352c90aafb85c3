"""Global test fixtures."""

import logfire
import pytest

from idproxy.config import ManagerConfig
from idproxy.domain.identity.service.identity import IdentityService
from idproxy.domain.manager.service.factory import IdentityFactory
from idproxy.domain.manager.service.manager import IdentityManagerService
from idproxy.domain.shared.model.value import Address
from idproxy.infrastructure.crypto.ed25519 import Ed25519SignatureVerifier, Signer
from idproxy.infrastructure.persistence.memory import (
    InMemoryIdentityRepository,
    InMemoryManagerRepository,
    InMemoryNonceRepository,
    InMemoryRoleRepository,
)
from idproxy.infrastructure.registry import ClaimRegistry, InMemoryOwnershipRegistry
from idproxy.infrastructure.target import AddressSpace
from tests.fakes import Counter, RecordingEventBus

# Keep spans local; nothing is exported during tests
logfire.configure(send_to_logfire=False, console=False)


@pytest.fixture
def event_bus() -> RecordingEventBus:
    return RecordingEventBus()


@pytest.fixture
def address_space() -> AddressSpace:
    return AddressSpace()


@pytest.fixture
def ownership_registry(address_space: AddressSpace) -> InMemoryOwnershipRegistry:
    registry = InMemoryOwnershipRegistry()
    address_space.register(registry)
    return registry


@pytest.fixture
def claim_registry(address_space: AddressSpace) -> ClaimRegistry:
    registry = ClaimRegistry()
    address_space.register(registry)
    return registry


@pytest.fixture
def counter(address_space: AddressSpace) -> Counter:
    target = Counter()
    address_space.register(target)
    return target


@pytest.fixture
def identity_repo() -> InMemoryIdentityRepository:
    return InMemoryIdentityRepository()


@pytest.fixture
def role_repo() -> InMemoryRoleRepository:
    return InMemoryRoleRepository()


@pytest.fixture
def nonce_repo() -> InMemoryNonceRepository:
    return InMemoryNonceRepository()


@pytest.fixture
def identity_service(
    identity_repo: InMemoryIdentityRepository,
    address_space: AddressSpace,
    ownership_registry: InMemoryOwnershipRegistry,
    event_bus: RecordingEventBus,
) -> IdentityService:
    return IdentityService(
        _identity_repo=identity_repo,
        _dispatcher=address_space,
        _ownership_registry=ownership_registry,
        _event_bus=event_bus,
    )


@pytest.fixture
def manager_config() -> ManagerConfig:
    return ManagerConfig()


@pytest.fixture
def manager_service(
    role_repo: InMemoryRoleRepository,
    nonce_repo: InMemoryNonceRepository,
    identity_service: IdentityService,
    event_bus: RecordingEventBus,
    manager_config: ManagerConfig,
) -> IdentityManagerService:
    return IdentityManagerService(
        _manager_repo=InMemoryManagerRepository(),
        _role_repo=role_repo,
        _nonce_repo=nonce_repo,
        _identity_service=identity_service,
        _verifier=Ed25519SignatureVerifier(),
        _event_bus=event_bus,
        _config=manager_config,
    )


@pytest.fixture
def factory(
    identity_service: IdentityService,
    manager_service: IdentityManagerService,
    event_bus: RecordingEventBus,
) -> IdentityFactory:
    return IdentityFactory(
        _identity_service=identity_service,
        _manager_service=manager_service,
        _event_bus=event_bus,
    )


@pytest.fixture
def owner() -> Address:
    return Address.generate()


@pytest.fixture
def action_signer() -> Signer:
    return Signer.generate()
