from collections.abc import Iterable

from dishka import Provider, Scope, provide
from sqlalchemy import Engine

from idproxy.config import Config
from idproxy.domain.identity.port.repository import IdentityRepository
from idproxy.domain.manager.port.nonce_repository import NonceRepository
from idproxy.domain.manager.port.repository import ManagerRepository
from idproxy.domain.manager.port.role_repository import RoleRepository
from idproxy.infrastructure.persistence.database import create_db_engine, init_schema
from idproxy.infrastructure.persistence.memory import (
    InMemoryIdentityRepository,
    InMemoryManagerRepository,
    InMemoryNonceRepository,
    InMemoryRoleRepository,
)
from idproxy.infrastructure.persistence.repository import (
    SqlIdentityRepository,
    SqlManagerRepository,
    SqlNonceRepository,
    SqlRoleRepository,
)


class MemoryPersistenceProvider(Provider):
    """Process-local state. Nonces do not survive a restart."""

    identity_repo = provide(
        InMemoryIdentityRepository, scope=Scope.APP, provides=IdentityRepository
    )
    manager_repo = provide(InMemoryManagerRepository, scope=Scope.APP, provides=ManagerRepository)
    role_repo = provide(InMemoryRoleRepository, scope=Scope.APP, provides=RoleRepository)
    nonce_repo = provide(InMemoryNonceRepository, scope=Scope.APP, provides=NonceRepository)


class SqlPersistenceProvider(Provider):
    # Factories require method syntax
    @provide(scope=Scope.APP)
    def get_engine(self, config: Config) -> Iterable[Engine]:
        engine = create_db_engine(config.database)
        if config.database.auto_create:
            init_schema(engine)
        yield engine
        engine.dispose()

    # Repositories
    identity_repo = provide(SqlIdentityRepository, scope=Scope.APP, provides=IdentityRepository)
    manager_repo = provide(SqlManagerRepository, scope=Scope.APP, provides=ManagerRepository)
    role_repo = provide(SqlRoleRepository, scope=Scope.APP, provides=RoleRepository)
    nonce_repo = provide(SqlNonceRepository, scope=Scope.APP, provides=NonceRepository)


def get_persistence_provider(config: Config) -> Provider:
    """SQL adapters when a database URL is configured, in-memory otherwise."""
    if config.database.is_persistent:
        return SqlPersistenceProvider()
    return MemoryPersistenceProvider()
