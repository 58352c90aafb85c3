from .events import CallForwarded, IdentityCreated, OwnershipTransferred

__all__ = ["CallForwarded", "IdentityCreated", "OwnershipTransferred"]
