import pytest

from idproxy.domain.manager.model import IdentityManager
from idproxy.domain.manager.model.role import Role
from idproxy.domain.manager.service.factory import IdentityFactory
from idproxy.domain.manager.service.manager import IdentityManagerService
from idproxy.domain.shared.model.value import Address
from idproxy.infrastructure.crypto.ed25519 import Signer


@pytest.fixture
def manager(factory: IdentityFactory, owner: Address) -> IdentityManager:
    """A manager that owns its identity, with `owner` as OWNER."""
    _, manager = factory.create_identity_with_manager(owner)
    return manager


@pytest.fixture
def action(
    manager_service: IdentityManagerService,
    manager: IdentityManager,
    owner: Address,
    action_signer: Signer,
) -> Signer:
    """`action_signer`, holding ACTION in `manager`."""
    manager_service.add_role(manager.address, owner, action_signer.address, Role.ACTION)
    return action_signer
