"""DI provider for the identity domain."""

from dishka import Provider, Scope, provide

from idproxy.domain.identity.service.identity import IdentityService


class IdentityProvider(Provider):
    identity_service = provide(IdentityService, scope=Scope.APP)
