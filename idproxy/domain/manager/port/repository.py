from abc import abstractmethod
from typing import Protocol

from idproxy.domain.manager.model.manager import IdentityManager
from idproxy.domain.shared.model.value import Address
from idproxy.domain.shared.port import Port


class ManagerRepository(Port, Protocol):
    """Repository for IdentityManager aggregate persistence."""

    @abstractmethod
    def get(self, address: Address) -> IdentityManager | None: ...

    @abstractmethod
    def save(self, manager: IdentityManager) -> None: ...
