from abc import abstractmethod
from typing import Protocol

from idproxy.domain.identity.model.identity import Identity
from idproxy.domain.shared.model.value import Address
from idproxy.domain.shared.port import Port


class IdentityRepository(Port, Protocol):
    """Repository for Identity aggregate persistence."""

    @abstractmethod
    def get(self, address: Address) -> Identity | None: ...

    @abstractmethod
    def save(self, identity: Identity) -> None: ...
