"""Shared value objects: the address space every principal and target lives in."""

import hashlib
import re
import secrets
from typing import Any

from pydantic import BaseModel, ConfigDict, RootModel, field_validator
from pydantic import ValidationError as PydanticValidationError

from idproxy.domain.shared.error import ValidationError

ADDRESS_PATTERN = re.compile(r"^0x[0-9a-f]{40}$")
ADDRESS_BYTES = 20


class ValueObject(BaseModel): ...


class Address(RootModel[str]):
    """A 20-byte address identifying a principal or an addressable target.

    Stored as ``0x`` followed by 40 lowercase hex characters. Raw 20-byte
    input is accepted and hex-encoded; mixed-case hex is normalised.
    """

    model_config = ConfigDict(frozen=True)

    @field_validator("root", mode="before")
    @classmethod
    def normalize(cls, v: Any) -> str:
        if isinstance(v, bytes):
            if len(v) != ADDRESS_BYTES:
                raise ValueError(f"Address must be {ADDRESS_BYTES} bytes, got {len(v)}")
            return "0x" + v.hex()
        if not isinstance(v, str):
            raise ValueError(f"Invalid address type: {type(v).__name__}")
        v = v.strip().lower()
        if not ADDRESS_PATTERN.match(v):
            raise ValueError(f"Invalid address format: {v}")
        return v

    @classmethod
    def parse(cls, value: str | bytes) -> "Address":
        """Parse user input, raising idproxy's ValidationError on bad input."""
        try:
            return cls(value)
        except PydanticValidationError as e:
            raise ValidationError(f"Invalid address: {value!r}", field="address") from e

    @classmethod
    def generate(cls) -> "Address":
        return cls("0x" + secrets.token_hex(ADDRESS_BYTES))

    @classmethod
    def from_public_key(cls, public_key: bytes) -> "Address":
        """Derive a principal address: last 20 bytes of sha3_256(public_key)."""
        return cls(hashlib.sha3_256(public_key).digest()[-ADDRESS_BYTES:])

    def to_bytes(self) -> bytes:
        return bytes.fromhex(self.root[2:])

    def __str__(self) -> str:
        return self.root

    def __hash__(self) -> int:
        return hash(self.root)
