import logging
from dataclasses import field

import logfire

from idproxy.domain.identity.model.identity import Identity
from idproxy.domain.identity.service.identity import IdentityService
from idproxy.domain.manager.event.events import IdentityWithManagerCreated
from idproxy.domain.manager.model.manager import IdentityManager
from idproxy.domain.manager.service.manager import IdentityManagerService
from idproxy.domain.shared.model.value import Address
from idproxy.domain.shared.port.event_bus import EventBus
from idproxy.domain.shared.service import Service

logger = logging.getLogger(__name__)


class IdentityFactory(Service):
    """Creates an identity and its manager in one step.

    The factory owns the fresh identity just long enough to hand it to the
    manager; `creator` becomes the manager's OWNER.
    """

    _identity_service: IdentityService
    _manager_service: IdentityManagerService
    _event_bus: EventBus
    address: Address = field(default_factory=Address.generate)

    def create_identity_with_manager(self, creator: Address) -> tuple[Identity, IdentityManager]:
        with logfire.span("CreateIdentityWithManager", creator=str(creator)):
            identity = self._identity_service.create(owner=self.address)
            manager = self._manager_service.create(identity.address, owner=creator)
            self._identity_service.transfer_ownership(
                identity.address, caller=self.address, new_owner=manager.address
            )

            logger.info(
                "Identity with manager created: identity=%s manager=%s creator=%s",
                identity.address,
                manager.address,
                creator,
            )
            self._event_bus.publish(
                IdentityWithManagerCreated(
                    identity=str(identity.address),
                    manager=str(manager.address),
                    creator=str(creator),
                )
            )
            return self._identity_service.get(identity.address), manager
