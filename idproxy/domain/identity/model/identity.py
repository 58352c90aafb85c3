"""Identity aggregate: a single-owner execution proxy."""

from datetime import UTC, datetime

from idproxy.domain.shared.error import AuthorizationError
from idproxy.domain.shared.model.aggregate import Aggregate
from idproxy.domain.shared.model.value import Address


class Identity(Aggregate):
    """An account-like entity that forwards calls on behalf of its owner.

    Invariants:
    - exactly one current `owner` at all times
    - only the current owner may forward calls or hand ownership on
    - `address` is immutable after creation
    """

    address: Address
    owner: Address
    created_at: datetime

    @classmethod
    def create(cls, owner: Address) -> "Identity":
        """Create a new identity with a fresh address."""
        return cls(
            address=Address.generate(),
            owner=owner,
            created_at=datetime.now(UTC),
        )

    def is_owner(self, caller: Address) -> bool:
        return caller == self.owner

    def ensure_owner(self, caller: Address) -> None:
        """Raise AuthorizationError unless `caller` is the current owner."""
        if not self.is_owner(caller):
            raise AuthorizationError(
                f"Caller {caller} is not the owner of identity {self.address}",
                code="not_owner",
            )

    def transfer_ownership(self, caller: Address, new_owner: Address) -> Address:
        """Hand ownership to `new_owner` and return the previous owner.

        `new_owner` is not checked for reachability; that is the caller's concern.
        """
        self.ensure_owner(caller)
        previous = self.owner
        self.owner = new_owner
        return previous
