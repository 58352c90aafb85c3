from datetime import UTC, datetime
from typing import Any

from sqlalchemy import Connection, Engine, delete, insert, select, update
from sqlalchemy.dialects import postgresql, sqlite

from idproxy.domain.manager.model.role import Role
from idproxy.domain.manager.port.role_repository import RoleRepository
from idproxy.domain.shared.model.value import Address
from idproxy.infrastructure.persistence.database import transaction
from idproxy.infrastructure.persistence.tables import roles_table


def _upsert_role(conn: Connection, values: dict[str, Any]) -> None:
    """Insert or overwrite one role row in a single statement where the dialect allows it."""
    dialect = conn.dialect.name
    changes = {"role": values["role"], "updated_at": values["updated_at"]}
    if dialect == "postgresql":
        stmt = postgresql.insert(roles_table).values(**values)
        conn.execute(
            stmt.on_conflict_do_update(index_elements=["manager", "principal"], set_=changes)
        )
    elif dialect == "sqlite":
        stmt = sqlite.insert(roles_table).values(**values)
        conn.execute(
            stmt.on_conflict_do_update(index_elements=["manager", "principal"], set_=changes)
        )
    else:
        result = conn.execute(
            update(roles_table)
            .where(
                roles_table.c.manager == values["manager"],
                roles_table.c.principal == values["principal"],
            )
            .values(**changes)
        )
        if result.rowcount == 0:
            conn.execute(insert(roles_table).values(**values))


class SqlRoleRepository(RoleRepository):
    """SQL implementation of RoleRepository. NONE is stored as an absent row."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def get(self, manager: Address, principal: Address) -> Role:
        stmt = select(roles_table.c.role).where(
            roles_table.c.manager == str(manager),
            roles_table.c.principal == str(principal),
        )
        with transaction(self._engine) as conn:
            value = conn.execute(stmt).scalar_one_or_none()
        return Role(value) if value is not None else Role.NONE

    def set(self, manager: Address, principal: Address, role: Role) -> None:
        with transaction(self._engine) as conn:
            if role == Role.NONE:
                conn.execute(
                    delete(roles_table).where(
                        roles_table.c.manager == str(manager),
                        roles_table.c.principal == str(principal),
                    )
                )
                return
            _upsert_role(
                conn,
                {
                    "manager": str(manager),
                    "principal": str(principal),
                    "role": int(role),
                    "updated_at": datetime.now(UTC),
                },
            )

    def roles(self, manager: Address) -> dict[Address, Role]:
        stmt = select(roles_table.c.principal, roles_table.c.role).where(
            roles_table.c.manager == str(manager)
        )
        with transaction(self._engine) as conn:
            rows = conn.execute(stmt).all()
        return {Address(principal): Role(role) for principal, role in rows}
