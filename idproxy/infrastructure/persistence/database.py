"""Database engine creation and transaction scope."""

import logging
import os
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Any

from sqlalchemy import Connection, Engine, create_engine
from sqlalchemy.exc import OperationalError
from sqlalchemy.pool import StaticPool

from idproxy.config import DatabaseConfig
from idproxy.domain.shared.error import ConfigurationError, StorageUnavailableError
from idproxy.infrastructure.persistence.tables import metadata

logger = logging.getLogger(__name__)

SQLITE_BUSY_TIMEOUT = 30  # seconds


def _is_sqlite_memory(url: str) -> bool:
    return url.rstrip("/") in ("sqlite:", "sqlite+pysqlite:") or ":memory:" in url


def _expand_sqlite_path(url: str) -> str:
    """Expand ~ in SQLite file URLs and ensure parent directory exists."""
    if not url.startswith("sqlite") or "///" not in url:
        return url

    prefix_end = url.index("///") + 3
    prefix = url[:prefix_end]
    path = url[prefix_end:]
    if not path or path == ":memory:":
        return url

    expanded = os.path.expanduser(path)
    abs_path = os.path.abspath(expanded)

    parent = Path(abs_path).parent
    parent.mkdir(parents=True, exist_ok=True)

    return f"{prefix}{abs_path}"


def create_db_engine(config: DatabaseConfig) -> Engine:
    """Create database engine.

    Handles SQLite and PostgreSQL with appropriate settings.
    """
    if not config.url:
        raise ConfigurationError("No database URL configured")

    url = _expand_sqlite_path(config.url)
    is_sqlite = url.startswith("sqlite")

    if is_sqlite and _is_sqlite_memory(url):
        engine_kwargs: dict[str, Any] = {
            "echo": config.echo,
            # One shared connection so the database survives across calls.
            # Single-threaded use only.
            "poolclass": StaticPool,
            "connect_args": {"check_same_thread": False},
        }
    elif is_sqlite:
        # Default pool: one connection per checkout, writers wait on the file lock
        engine_kwargs = {
            "echo": config.echo,
            "connect_args": {"check_same_thread": False, "timeout": SQLITE_BUSY_TIMEOUT},
        }
    else:
        engine_kwargs = {
            "echo": config.echo,
            "pool_pre_ping": True,
            "pool_size": 5,
            "max_overflow": 10,
        }

    return create_engine(url, **engine_kwargs)


def init_schema(engine: Engine) -> None:
    """Create missing tables."""
    with transaction(engine) as conn:
        metadata.create_all(conn)
    logger.info("Database schema ready: %s", engine.url.render_as_string(hide_password=True))


@contextmanager
def transaction(engine: Engine) -> Iterator[Connection]:
    """One transaction: committed on success, rolled back on error."""
    try:
        with engine.begin() as conn:
            yield conn
    except OperationalError as e:
        raise StorageUnavailableError(f"Database unavailable: {e.orig}") from e
