from .claims import ClaimRegistry
from .ownership import InMemoryOwnershipRegistry

__all__ = ["ClaimRegistry", "InMemoryOwnershipRegistry"]
