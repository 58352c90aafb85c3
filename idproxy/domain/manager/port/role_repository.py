"""Repository port for a manager's role table."""

from abc import abstractmethod
from typing import Protocol

from idproxy.domain.manager.model.role import Role
from idproxy.domain.shared.model.value import Address
from idproxy.domain.shared.port import Port


class RoleRepository(Port, Protocol):
    """One role per (manager, principal). Absent entries read as Role.NONE."""

    @abstractmethod
    def get(self, manager: Address, principal: Address) -> Role:
        """Get the stored role, Role.NONE if absent."""
        ...

    @abstractmethod
    def set(self, manager: Address, principal: Address, role: Role) -> None:
        """Store `role`, overwriting any previous one. Role.NONE clears the entry."""
        ...

    @abstractmethod
    def roles(self, manager: Address) -> dict[Address, Role]:
        """All principals with a role other than NONE."""
        ...
