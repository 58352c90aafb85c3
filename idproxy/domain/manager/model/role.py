"""Roles held by principals in a manager's role table."""

from enum import IntEnum


class Role(IntEnum):
    """Exactly one role per principal.

    Unlike a hierarchy, roles are compared by exact match: OWNER does not
    imply ACTION. Numeric values are the stored/wire representation.
    """

    NONE = 0
    OWNER = 1
    ACTION = 2
