"""DI provider for the manager domain."""

from dishka import Provider, Scope, provide

from idproxy.config import Config
from idproxy.domain.identity.service.identity import IdentityService
from idproxy.domain.manager.port.nonce_repository import NonceRepository
from idproxy.domain.manager.port.repository import ManagerRepository
from idproxy.domain.manager.port.role_repository import RoleRepository
from idproxy.domain.manager.port.signature import SignatureVerifier
from idproxy.domain.manager.service.factory import IdentityFactory
from idproxy.domain.manager.service.manager import IdentityManagerService
from idproxy.domain.shared.port.event_bus import EventBus


class ManagerProvider(Provider):
    """DI provider for manager services and the identity factory."""

    @provide(scope=Scope.APP)
    def get_manager_service(
        self,
        config: Config,
        manager_repo: ManagerRepository,
        role_repo: RoleRepository,
        nonce_repo: NonceRepository,
        identity_service: IdentityService,
        verifier: SignatureVerifier,
        event_bus: EventBus,
    ) -> IdentityManagerService:
        return IdentityManagerService(
            _manager_repo=manager_repo,
            _role_repo=role_repo,
            _nonce_repo=nonce_repo,
            _identity_service=identity_service,
            _verifier=verifier,
            _event_bus=event_bus,
            _config=config.manager,
        )

    @provide(scope=Scope.APP)
    def get_identity_factory(
        self,
        identity_service: IdentityService,
        manager_service: IdentityManagerService,
        event_bus: EventBus,
    ) -> IdentityFactory:
        return IdentityFactory(
            _identity_service=identity_service,
            _manager_service=manager_service,
            _event_bus=event_bus,
        )
