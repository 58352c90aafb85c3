import logging
from typing import Any

from idproxy.domain.identity.port.dispatcher import CallDispatcher
from idproxy.domain.shared.error import NotFoundError
from idproxy.domain.shared.model.call import CallContext
from idproxy.domain.shared.model.value import Address
from idproxy.infrastructure.target.base import Target

logger = logging.getLogger(__name__)


class AddressSpace(CallDispatcher):
    """In-process registry of addressable targets."""

    def __init__(self) -> None:
        self._targets: dict[Address, Target] = {}

    def register(self, target: Target) -> Target:
        self._targets[target.address] = target
        logger.debug("Registered target %s at %s", type(target).__name__, target.address)
        return target

    def get(self, address: Address) -> Target | None:
        return self._targets.get(address)

    def dispatch(self, ctx: CallContext, target: Address, data: bytes) -> Any:
        resolved = self._targets.get(target)
        if resolved is None:
            raise NotFoundError(f"No target at {target}", code="target_not_found")
        logger.debug("Dispatching call from %s to %s", ctx.sender, target)
        return resolved.invoke(ctx, data)
