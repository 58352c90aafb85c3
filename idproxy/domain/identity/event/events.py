"""Domain events for the identity domain."""

from idproxy.domain.shared.event import Event


class IdentityCreated(Event):
    """Emitted when a new identity is created and registered as its own owner."""

    identity: str
    owner: str


class OwnershipTransferred(Event):
    """Emitted when an identity's owner changes."""

    identity: str
    previous_owner: str
    new_owner: str


class CallForwarded(Event):
    """Emitted after an identity successfully forwarded a call."""

    identity: str
    caller: str
    target: str
    value: int
    data: str  # hex-encoded call data
