"""In-memory repository adapters, used when no database URL is configured."""

import threading

from idproxy.domain.identity.model.identity import Identity
from idproxy.domain.identity.port.repository import IdentityRepository
from idproxy.domain.manager.model.manager import IdentityManager
from idproxy.domain.manager.model.role import Role
from idproxy.domain.manager.port.nonce_repository import NonceRepository
from idproxy.domain.manager.port.repository import ManagerRepository
from idproxy.domain.manager.port.role_repository import RoleRepository
from idproxy.domain.shared.model.value import Address


class InMemoryIdentityRepository(IdentityRepository):
    def __init__(self) -> None:
        self._identities: dict[Address, Identity] = {}

    def get(self, address: Address) -> Identity | None:
        identity = self._identities.get(address)
        # Callers mutate what they load; only save() may change stored state.
        return identity.model_copy(deep=True) if identity else None

    def save(self, identity: Identity) -> None:
        self._identities[identity.address] = identity.model_copy(deep=True)


class InMemoryManagerRepository(ManagerRepository):
    def __init__(self) -> None:
        self._managers: dict[Address, IdentityManager] = {}

    def get(self, address: Address) -> IdentityManager | None:
        manager = self._managers.get(address)
        return manager.model_copy(deep=True) if manager else None

    def save(self, manager: IdentityManager) -> None:
        self._managers[manager.address] = manager.model_copy(deep=True)


class InMemoryRoleRepository(RoleRepository):
    def __init__(self) -> None:
        self._roles: dict[tuple[Address, Address], Role] = {}

    def get(self, manager: Address, principal: Address) -> Role:
        return self._roles.get((manager, principal), Role.NONE)

    def set(self, manager: Address, principal: Address, role: Role) -> None:
        if role == Role.NONE:
            self._roles.pop((manager, principal), None)
        else:
            self._roles[(manager, principal)] = role

    def roles(self, manager: Address) -> dict[Address, Role]:
        return {p: r for (m, p), r in self._roles.items() if m == manager}


class InMemoryNonceRepository(NonceRepository):
    def __init__(self) -> None:
        self._nonces: dict[tuple[Address, bytes], int] = {}
        self._lock = threading.Lock()

    def get(self, manager: Address, fingerprint: bytes) -> int:
        return self._nonces.get((manager, fingerprint), 0)

    def advance(self, manager: Address, fingerprint: bytes, expected: int) -> bool:
        key = (manager, fingerprint)
        with self._lock:
            if self._nonces.get(key, 0) != expected:
                return False
            self._nonces[key] = expected + 1
            return True
