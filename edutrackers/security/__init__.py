"""Authorization core: privileged role lookups, the row policy table and tokens."""

from edutrackers.security.policies import (
    Entity,
    Operation,
    PolicyContext,
    Rule,
    RULES,
    can_read,
    can_write,
    check_write,
)
from edutrackers.security.roles import RoleDirectory, RoleLookup

__all__ = [
    "Entity",
    "Operation",
    "PolicyContext",
    "RoleDirectory",
    "RoleLookup",
    "Rule",
    "RULES",
    "can_read",
    "can_write",
    "check_write",
]
