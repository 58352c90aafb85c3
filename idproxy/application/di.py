from dishka import Container, Provider, Scope, from_context, make_container

from idproxy.config import Config
from idproxy.domain.identity.util.di import IdentityProvider
from idproxy.domain.manager.util.di import ManagerProvider
from idproxy.infrastructure.crypto.di import CryptoProvider
from idproxy.infrastructure.event.di import EventProvider
from idproxy.infrastructure.persistence.di import get_persistence_provider
from idproxy.infrastructure.target.di import TargetProvider


class ConfigProvider(Provider):
    config = from_context(provides=Config, scope=Scope.APP)


def create_container(config: Config | None = None) -> Container:
    config = config or Config()

    return make_container(
        ConfigProvider(),
        get_persistence_provider(config),
        EventProvider(),
        CryptoProvider(),
        TargetProvider(),
        IdentityProvider(),
        ManagerProvider(),
        context={Config: config},
    )
