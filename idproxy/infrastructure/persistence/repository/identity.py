from sqlalchemy import Engine, insert, select, update

from idproxy.domain.identity.model.identity import Identity
from idproxy.domain.identity.port.repository import IdentityRepository
from idproxy.domain.shared.model.value import Address
from idproxy.infrastructure.persistence.database import transaction
from idproxy.infrastructure.persistence.mappers import identity_to_dict, row_to_identity
from idproxy.infrastructure.persistence.tables import identities_table


class SqlIdentityRepository(IdentityRepository):
    """SQL implementation of IdentityRepository."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def get(self, address: Address) -> Identity | None:
        stmt = select(identities_table).where(identities_table.c.address == str(address))
        with transaction(self._engine) as conn:
            row = conn.execute(stmt).mappings().first()
        return row_to_identity(row) if row else None

    def save(self, identity: Identity) -> None:
        values = identity_to_dict(identity)
        with transaction(self._engine) as conn:
            result = conn.execute(
                update(identities_table)
                .where(identities_table.c.address == values["address"])
                .values(owner=values["owner"])
            )
            if result.rowcount == 0:
                conn.execute(insert(identities_table).values(**values))
