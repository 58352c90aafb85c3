"""Row <-> aggregate mapping for the SQL repositories."""

from collections.abc import Mapping
from datetime import UTC, datetime
from typing import Any

from idproxy.domain.identity.model.identity import Identity
from idproxy.domain.manager.model.manager import IdentityManager
from idproxy.domain.shared.model.value import Address


def _aware(value: datetime) -> datetime:
    # SQLite drops tzinfo on the way back
    return value if value.tzinfo else value.replace(tzinfo=UTC)


def identity_to_dict(identity: Identity) -> dict[str, Any]:
    return {
        "address": str(identity.address),
        "owner": str(identity.owner),
        "created_at": identity.created_at,
    }


def row_to_identity(row: Mapping[str, Any]) -> Identity:
    return Identity(
        address=Address(row["address"]),
        owner=Address(row["owner"]),
        created_at=_aware(row["created_at"]),
    )


def manager_to_dict(manager: IdentityManager) -> dict[str, Any]:
    return {
        "address": str(manager.address),
        "identity": str(manager.identity),
        "created_at": manager.created_at,
    }


def row_to_manager(row: Mapping[str, Any]) -> IdentityManager:
    return IdentityManager(
        address=Address(row["address"]),
        identity=Address(row["identity"]),
        created_at=_aware(row["created_at"]),
    )
