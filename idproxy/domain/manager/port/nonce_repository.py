"""Repository port for a manager's fingerprint -> nonce table."""

from abc import abstractmethod
from typing import Protocol

from idproxy.domain.shared.model.value import Address
from idproxy.domain.shared.port import Port


class NonceRepository(Port, Protocol):
    """Per-fingerprint counters. Monotonic, never reset."""

    @abstractmethod
    def get(self, manager: Address, fingerprint: bytes) -> int:
        """Current counter, 0 if the fingerprint was never consumed."""
        ...

    @abstractmethod
    def advance(self, manager: Address, fingerprint: bytes, expected: int) -> bool:
        """Atomically move the counter from `expected` to `expected + 1`.

        Returns False and changes nothing if the stored counter is not `expected`.
        """
        ...
