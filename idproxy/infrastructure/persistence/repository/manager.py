from sqlalchemy import Engine, insert, select, update

from idproxy.domain.manager.model.manager import IdentityManager
from idproxy.domain.manager.port.repository import ManagerRepository
from idproxy.domain.shared.model.value import Address
from idproxy.infrastructure.persistence.database import transaction
from idproxy.infrastructure.persistence.mappers import manager_to_dict, row_to_manager
from idproxy.infrastructure.persistence.tables import managers_table


class SqlManagerRepository(ManagerRepository):
    """SQL implementation of ManagerRepository."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def get(self, address: Address) -> IdentityManager | None:
        stmt = select(managers_table).where(managers_table.c.address == str(address))
        with transaction(self._engine) as conn:
            row = conn.execute(stmt).mappings().first()
        return row_to_manager(row) if row else None

    def save(self, manager: IdentityManager) -> None:
        values = manager_to_dict(manager)
        with transaction(self._engine) as conn:
            result = conn.execute(
                update(managers_table)
                .where(managers_table.c.address == values["address"])
                .values(identity=values["identity"])
            )
            if result.rowcount == 0:
                conn.execute(insert(managers_table).values(**values))
