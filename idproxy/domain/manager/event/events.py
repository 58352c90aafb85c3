"""Domain events for the manager domain."""

from idproxy.domain.shared.event import Event


class ManagerCreated(Event):
    """Emitted when a manager is created for an identity."""

    manager: str
    identity: str
    owner: str


class RoleChanged(Event):
    """Emitted when an OWNER principal sets (or clears) a principal's role."""

    manager: str
    principal: str
    previous_role: str
    role: str
    changed_by: str


class NonceConsumed(Event):
    """Emitted when a signed authorization is spent, once its forward has been attempted."""

    manager: str
    fingerprint: str
    nonce: int
    signer: str
    relayer: str


class IdentityWithManagerCreated(Event):
    """Emitted by the factory once an identity and its manager are wired together."""

    identity: str
    manager: str
    creator: str
