"""Canonical encodings for call fingerprints and signed authorizations.

Every integer is fixed-width big-endian (32 bytes) and call data is
length-prefixed, so no two distinct tuples share an encoding.
"""

import hashlib

from idproxy.domain.shared.model.call import Call
from idproxy.domain.shared.model.value import Address

WORD = 32

SIGNED_CALL_PREFIX = b"\x19idproxy signed call:\n32"
"""Domain separation for signatures: a signed call digest can never be mistaken for other signed bytes."""


def _uint(value: int) -> bytes:
    return value.to_bytes(WORD, "big")


def _encode_call(call: Call) -> bytes:
    return call.target.to_bytes() + _uint(call.value) + _uint(len(call.data)) + call.data


def call_fingerprint(call: Call) -> bytes:
    """32-byte digest of (target, value, data).

    Identifies what is called, never who calls it.
    """
    return hashlib.sha3_256(_encode_call(call)).digest()


def signed_call_digest(manager: Address, call: Call, nonce: int) -> bytes:
    """32-byte digest of (manager, target, value, data, nonce), the message a signer authorizes."""
    if nonce < 0:
        raise ValueError(f"nonce must be >= 0, got {nonce}")
    return hashlib.sha3_256(manager.to_bytes() + _encode_call(call) + _uint(nonce)).digest()


def signing_payload(digest: bytes) -> bytes:
    """The exact bytes a signer signs for `digest`."""
    return SIGNED_CALL_PREFIX + digest
