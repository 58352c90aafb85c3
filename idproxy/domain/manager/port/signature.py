from abc import abstractmethod
from typing import Protocol

from idproxy.domain.shared.model.value import Address
from idproxy.domain.shared.port import Port


class SignatureVerifier(Port, Protocol):
    """Recovers the principal that signed a digest."""

    @abstractmethod
    def recover(self, digest: bytes, signature: bytes) -> Address:
        """Return the signer's address.

        Raises:
            InvalidSignatureError: malformed signature, or it does not verify for `digest`.
        """
        ...
