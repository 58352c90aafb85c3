from .dispatcher import CallDispatcher
from .ownership_registry import OwnershipRegistry
from .repository import IdentityRepository

__all__ = ["CallDispatcher", "IdentityRepository", "OwnershipRegistry"]
