from .provider import IdentityProvider

__all__ = ["IdentityProvider"]
