"""Identity service: creation, forwarding and ownership transfer."""

import logging
from typing import Any

import logfire

from idproxy.domain.identity.event.events import (
    CallForwarded,
    IdentityCreated,
    OwnershipTransferred,
)
from idproxy.domain.identity.model.identity import Identity
from idproxy.domain.identity.port.dispatcher import CallDispatcher
from idproxy.domain.identity.port.ownership_registry import OwnershipRegistry
from idproxy.domain.identity.port.repository import IdentityRepository
from idproxy.domain.shared.error import ForwardFailedError, NotFoundError
from idproxy.domain.shared.model.call import Call, CallContext
from idproxy.domain.shared.model.value import Address
from idproxy.domain.shared.port.event_bus import EventBus
from idproxy.domain.shared.service import Service

logger = logging.getLogger(__name__)


class IdentityService(Service):
    """Operations on identities, addressed by identity address.

    The identity holds no business logic beyond forwarding and ownership:
    whatever a forwarded call does is up to the target.
    """

    _identity_repo: IdentityRepository
    _dispatcher: CallDispatcher
    _ownership_registry: OwnershipRegistry
    _event_bus: EventBus

    def create(self, owner: Address) -> Identity:
        """Create an identity owned by `owner` and register it as its own owner."""
        identity = Identity.create(owner)
        self._identity_repo.save(identity)

        # Self-sovereignty: the registry record names the identity itself,
        # independently of the internal owner field.
        self._ownership_registry.set_owner(
            identity.address, identity.address, sender=identity.address
        )

        logger.info("Identity created: identity=%s owner=%s", identity.address, owner)
        self._event_bus.publish(IdentityCreated(identity=str(identity.address), owner=str(owner)))
        return identity

    def get(self, address: Address) -> Identity:
        identity = self._identity_repo.get(address)
        if identity is None:
            raise NotFoundError(f"Identity not found: {address}", code="identity_not_found")
        return identity

    def execute(self, address: Address, caller: Address, call: Call) -> Any:
        """Forward `call` from the identity. Only the current owner may do this.

        Raises:
            AuthorizationError: `caller` is not the identity's owner. Nothing is forwarded.
            ForwardFailedError: the target could not be reached or refused the call.
        """
        with logfire.span("IdentityExecute", identity=str(address), target=str(call.target)):
            identity = self.get(address)
            identity.ensure_owner(caller)

            ctx = CallContext(sender=identity.address, value=call.value)
            try:
                result = self._dispatcher.dispatch(ctx, call.target, call.data)
            except Exception as e:
                logger.warning(
                    "Forward failed: identity=%s target=%s error=%s",
                    identity.address,
                    call.target,
                    e,
                )
                raise ForwardFailedError(
                    f"Call from {identity.address} to {call.target} failed: {e}"
                ) from e

            self._event_bus.publish(
                CallForwarded(
                    identity=str(identity.address),
                    caller=str(caller),
                    target=str(call.target),
                    value=call.value,
                    data=call.data.hex(),
                )
            )
            return result

    def transfer_ownership(self, address: Address, caller: Address, new_owner: Address) -> None:
        """Hand the identity to `new_owner`. Only the current owner may do this."""
        with logfire.span("TransferOwnership", identity=str(address)):
            identity = self.get(address)
            previous = identity.transfer_ownership(caller, new_owner)
            self._identity_repo.save(identity)

            logger.info(
                "Ownership transferred: identity=%s from=%s to=%s",
                identity.address,
                previous,
                new_owner,
            )
            self._event_bus.publish(
                OwnershipTransferred(
                    identity=str(identity.address),
                    previous_owner=str(previous),
                    new_owner=str(new_owner),
                )
            )
