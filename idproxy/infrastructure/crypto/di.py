from dishka import Provider, Scope, provide

from idproxy.domain.manager.port.signature import SignatureVerifier
from idproxy.infrastructure.crypto.ed25519 import Ed25519SignatureVerifier


class CryptoProvider(Provider):
    @provide(scope=Scope.APP)
    def get_verifier(self) -> SignatureVerifier:
        return Ed25519SignatureVerifier()
