from abc import abstractmethod
from typing import Any, Protocol

from idproxy.domain.shared.model.call import CallContext
from idproxy.domain.shared.model.value import Address
from idproxy.domain.shared.port import Port


class CallDispatcher(Port, Protocol):
    """Delivers a forwarded call to the addressed target.

    How a target interprets `data` is the dispatcher's and the target's
    business; the identity only decides whether the call may go out.
    """

    @abstractmethod
    def dispatch(self, ctx: CallContext, target: Address, data: bytes) -> Any:
        """Invoke `target` with `data`, returning its result or raising its failure."""
        ...
