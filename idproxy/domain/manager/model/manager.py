"""IdentityManager aggregate."""

from datetime import UTC, datetime

from idproxy.domain.shared.model.aggregate import Aggregate
from idproxy.domain.shared.model.value import Address


class IdentityManager(Aggregate):
    """Role-based broker bound to exactly one identity.

    The manager only becomes functional once it is the identity's owner;
    that transfer happens outside the manager. Its role and nonce tables are
    kept by their own repositories, keyed by the manager address.
    """

    address: Address
    identity: Address
    created_at: datetime

    @classmethod
    def create(cls, identity: Address) -> "IdentityManager":
        return cls(
            address=Address.generate(),
            identity=identity,
            created_at=datetime.now(UTC),
        )
