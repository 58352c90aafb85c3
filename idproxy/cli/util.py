"""Argument parsing shared by CLI commands."""

import json
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from idproxy.domain.shared.error import ValidationError
from idproxy.domain.shared.model.call import Call
from idproxy.domain.shared.model.value import Address


def parse_hex(value: str, *, field: str = "data") -> bytes:
    try:
        return bytes.fromhex(value.removeprefix("0x"))
    except ValueError as e:
        raise ValidationError(f"{field} must be hex-encoded", field=field) from e


def parse_call(target: str, value: int, data: str) -> Call:
    address = Address.parse(target)
    try:
        return Call(target=address, value=value, data=parse_hex(data))
    except PydanticValidationError as e:
        raise ValidationError("value must be an unsigned 256-bit integer", field="value") from e


def parse_arg(raw: str) -> Any:
    """Interpret a CLI argument as a JSON literal, falling back to the raw string."""
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        return raw
