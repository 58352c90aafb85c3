from .provider import ManagerProvider

__all__ = ["ManagerProvider"]
