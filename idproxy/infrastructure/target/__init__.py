from .address_space import AddressSpace
from .base import Target, external

__all__ = ["AddressSpace", "Target", "external"]
