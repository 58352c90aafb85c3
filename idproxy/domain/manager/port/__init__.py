from .nonce_repository import NonceRepository
from .repository import ManagerRepository
from .role_repository import RoleRepository
from .signature import SignatureVerifier

__all__ = ["ManagerRepository", "NonceRepository", "RoleRepository", "SignatureVerifier"]
