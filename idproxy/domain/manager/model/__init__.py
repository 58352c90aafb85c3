"""Manager domain models."""

from .encoding import call_fingerprint, signed_call_digest, signing_payload
from .manager import IdentityManager
from .role import Role

__all__ = [
    "IdentityManager",
    "Role",
    "call_fingerprint",
    "signed_call_digest",
    "signing_payload",
]
