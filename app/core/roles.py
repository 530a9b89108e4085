"""
Role hierarchy.

The four roles form a fixed chain. Each role may create accounts of exactly
one role, the next one down, and the leaf role creates nothing.
"""

from enum import Enum
from typing import Optional


class Role(str, Enum):
    ROOT = "root"
    ADMIN = "admin"
    SUB_ADMIN = "sub_admin"
    LEAF = "leaf"

    @property
    def label(self) -> str:
        return ROLE_LABELS[self]


# parent role -> the only role it may create
CHILD_ROLE = {
    Role.ROOT: Role.ADMIN,
    Role.ADMIN: Role.SUB_ADMIN,
    Role.SUB_ADMIN: Role.LEAF,
}

PARENT_ROLE = {child: parent for parent, child in CHILD_ROLE.items()}

ROLE_LABELS = {
    Role.ROOT: "Super-Admin",
    Role.ADMIN: "Admin",
    Role.SUB_ADMIN: "Sub Admin",
    Role.LEAF: "User",
}


def child_role(role: Role) -> Optional[Role]:
    return CHILD_ROLE.get(role)


def can_create(parent: Role, child: Role) -> bool:
    """True when `parent` is exactly one level above `child`."""
    return CHILD_ROLE.get(parent) is child
