"""Calls: what is forwarded, what a target sees, and how call data is encoded."""

import json
from dataclasses import dataclass
from typing import Any

from pydantic import ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from idproxy.domain.shared.error import ValidationError
from idproxy.domain.shared.model.value import Address, ValueObject

UINT256_MAX = 2**256 - 1


class Call(ValueObject):
    """The (target, value, data) triple forwarded by an identity.

    ``value`` is an unsigned 256-bit integer; ``data`` is opaque to the core.
    """

    model_config = ConfigDict(frozen=True)

    target: Address
    value: int = Field(default=0, ge=0, le=UINT256_MAX, strict=True)
    data: bytes = b""


@dataclass(frozen=True)
class CallContext:
    """What a target sees when invoked: the immediate sender and the value carried."""

    sender: Address
    value: int = 0


class CallData(ValueObject):
    """Method name plus arguments, encoded as canonical JSON bytes.

    Canonical means sorted keys and no insignificant whitespace, so equal
    calls always encode to equal bytes (and therefore equal fingerprints).
    """

    method: str
    args: list[Any] = []

    def encode(self) -> bytes:
        payload = self.model_dump(mode="json")
        return json.dumps(payload, sort_keys=True, separators=(",", ":")).encode()

    @classmethod
    def decode(cls, data: bytes) -> "CallData":
        try:
            return cls.model_validate_json(data)
        except PydanticValidationError as e:
            raise ValidationError(f"Malformed call data: {data[:64]!r}", field="data") from e


def encode_call(method: str, *args: Any) -> bytes:
    """Encode a method invocation as call data."""
    return CallData(method=method, args=list(args)).encode()
