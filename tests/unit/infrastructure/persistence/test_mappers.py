from datetime import datetime

from idproxy.domain.identity.model import Identity
from idproxy.domain.manager.model import IdentityManager
from idproxy.domain.shared.model.value import Address
from idproxy.infrastructure.persistence.mappers import (
    identity_to_dict,
    manager_to_dict,
    row_to_identity,
    row_to_manager,
)


class TestMappers:
    def test_identity_mapping(self) -> None:
        identity = Identity.create(Address.generate())

        data = identity_to_dict(identity)
        assert data["address"] == str(identity.address)
        assert data["owner"] == str(identity.owner)

        assert row_to_identity(data) == identity

    def test_manager_mapping(self) -> None:
        manager = IdentityManager.create(Address.generate())
        assert row_to_manager(manager_to_dict(manager)) == manager

    def test_naive_timestamps_are_read_as_utc(self) -> None:
        row = {
            "address": str(Address.generate()),
            "owner": str(Address.generate()),
            "created_at": datetime(2024, 1, 1, 12, 0),
        }
        assert row_to_identity(row).created_at.tzinfo is not None
