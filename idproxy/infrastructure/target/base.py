"""Addressable targets: objects that identities can forward calls to."""

from collections.abc import Callable
from typing import Any, TypeVar

from idproxy.domain.shared.error import TargetError
from idproxy.domain.shared.model.call import CallContext, CallData
from idproxy.domain.shared.model.value import Address

F = TypeVar("F", bound=Callable[..., Any])


def external(fn: F) -> F:
    """Mark a target method as callable through call data.

    The method receives the CallContext first, then the decoded arguments.
    """
    fn.__external__ = True  # type: ignore[attr-defined]
    return fn


class Target:
    """Base for addressable targets.

    Only methods marked with @external are reachable through invoke();
    everything else is local API for the process that owns the target.
    """

    def __init__(self, address: Address | None = None) -> None:
        self.address = address or Address.generate()

    def invoke(self, ctx: CallContext, data: bytes) -> Any:
        call = CallData.decode(data)
        method = getattr(type(self), call.method, None)
        if method is None or not getattr(method, "__external__", False):
            raise TargetError(
                f"{type(self).__name__} at {self.address} has no external method {call.method!r}",
                code="unknown_method",
            )
        try:
            return method(self, ctx, *call.args)
        except TypeError as e:
            raise TargetError(
                f"Bad arguments for {type(self).__name__}.{call.method}: {e}",
                code="bad_arguments",
            ) from e
