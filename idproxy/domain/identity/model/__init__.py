"""Identity domain models."""

from .identity import Identity

__all__ = ["Identity"]
