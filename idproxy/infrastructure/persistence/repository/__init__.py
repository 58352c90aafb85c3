from .identity import SqlIdentityRepository
from .manager import SqlManagerRepository
from .nonce import SqlNonceRepository
from .role import SqlRoleRepository

__all__ = [
    "SqlIdentityRepository",
    "SqlManagerRepository",
    "SqlNonceRepository",
    "SqlRoleRepository",
]
