"""In-memory ownership registry: who controls an identity, for external lookup."""

import logging
import threading

from idproxy.domain.identity.port.ownership_registry import OwnershipRegistry
from idproxy.domain.shared.error import AuthorizationError
from idproxy.domain.shared.model.call import CallContext
from idproxy.domain.shared.model.value import Address
from idproxy.infrastructure.target.base import Target, external

logger = logging.getLogger(__name__)


class InMemoryOwnershipRegistry(Target, OwnershipRegistry):
    """Ownership registry that is also an addressable target.

    An unrecorded identity owns itself, so an identity can always make the
    first registration on its own behalf. Identities reach the registry
    through `execute` via the `change_owner` and `identity_owner` externals.
    """

    def __init__(self, address: Address | None = None) -> None:
        super().__init__(address)
        self._owners: dict[Address, Address] = {}
        self._lock = threading.Lock()

    def owner_of(self, identity: Address) -> Address:
        return self._owners.get(identity, identity)

    def set_owner(self, identity: Address, new_owner: Address, *, sender: Address) -> None:
        with self._lock:
            current = self.owner_of(identity)
            if sender != current:
                raise AuthorizationError(
                    f"{sender} is not the registered owner of {identity}",
                    code="not_registered_owner",
                )
            self._owners[identity] = new_owner
        logger.info("Registry owner set: identity=%s owner=%s", identity, new_owner)

    @external
    def change_owner(self, ctx: CallContext, identity: str, new_owner: str) -> None:
        self.set_owner(Address(identity), Address(new_owner), sender=ctx.sender)

    @external
    def identity_owner(self, ctx: CallContext, identity: str) -> str:
        return str(self.owner_of(Address(identity)))
