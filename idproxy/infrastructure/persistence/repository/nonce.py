from datetime import UTC, datetime
from typing import Any

from sqlalchemy import Connection, Engine, Table, insert, select, update
from sqlalchemy.dialects import postgresql, sqlite

from idproxy.domain.manager.port.nonce_repository import NonceRepository
from idproxy.domain.shared.model.value import Address
from idproxy.infrastructure.persistence.database import transaction
from idproxy.infrastructure.persistence.tables import nonces_table


def _ensure_row(conn: Connection, table: Table, values: dict[str, Any]) -> None:
    """Insert the zero row unless it already exists, without racing other writers."""
    dialect = conn.dialect.name
    if dialect == "postgresql":
        stmt = postgresql.insert(table).values(**values).on_conflict_do_nothing()
    elif dialect == "sqlite":
        stmt = sqlite.insert(table).values(**values).on_conflict_do_nothing()
    else:
        exists = conn.execute(
            select(table.c.nonce).where(
                table.c.manager == values["manager"],
                table.c.fingerprint == values["fingerprint"],
            )
        ).first()
        if exists:
            return
        stmt = insert(table).values(**values)
    conn.execute(stmt)


class SqlNonceRepository(NonceRepository):
    """SQL implementation of NonceRepository.

    advance() is a single conditional UPDATE, so two transactions can never
    both move the same counter away from the same value.
    """

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def get(self, manager: Address, fingerprint: bytes) -> int:
        stmt = select(nonces_table.c.nonce).where(
            nonces_table.c.manager == str(manager),
            nonces_table.c.fingerprint == fingerprint.hex(),
        )
        with transaction(self._engine) as conn:
            value = conn.execute(stmt).scalar_one_or_none()
        return value or 0

    def advance(self, manager: Address, fingerprint: bytes, expected: int) -> bool:
        key = {"manager": str(manager), "fingerprint": fingerprint.hex()}
        now = datetime.now(UTC)
        with transaction(self._engine) as conn:
            if expected == 0:
                _ensure_row(conn, nonces_table, {**key, "nonce": 0, "updated_at": now})
            result = conn.execute(
                update(nonces_table)
                .where(
                    nonces_table.c.manager == key["manager"],
                    nonces_table.c.fingerprint == key["fingerprint"],
                    nonces_table.c.nonce == expected,
                )
                .values(nonce=expected + 1, updated_at=now)
            )
            return result.rowcount == 1
