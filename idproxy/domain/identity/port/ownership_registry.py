from abc import abstractmethod
from typing import Protocol

from idproxy.domain.shared.model.value import Address
from idproxy.domain.shared.port import Port


class OwnershipRegistry(Port, Protocol):
    """Externally discoverable record of who controls an identity.

    Independent of the identity's internal owner field; the two may diverge.
    """

    @abstractmethod
    def owner_of(self, identity: Address) -> Address:
        """Registered owner of `identity`, or `identity` itself when unrecorded."""
        ...

    @abstractmethod
    def set_owner(self, identity: Address, new_owner: Address, *, sender: Address) -> None:
        """Record `new_owner`. Raises AuthorizationError unless `sender` is the current owner."""
        ...
