from .events import IdentityWithManagerCreated, ManagerCreated, NonceConsumed, RoleChanged

__all__ = ["IdentityWithManagerCreated", "ManagerCreated", "NonceConsumed", "RoleChanged"]
