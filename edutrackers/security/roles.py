"""Privileged role lookups used from inside policy predicates.

The "teachers can view all profiles" rule guards the profiles table but has to
read the profiles table to learn whether the requester is a teacher. Routing
that read through the scoped store would evaluate the same rule again, so
predicates ask a ``RoleLookup`` instead. ``RoleDirectory`` answers from a plain
SELECT on the session and never consults the rule table.
"""

from typing import Dict, Optional, Protocol

from sqlalchemy import select
from sqlalchemy.orm import Session

from edutrackers.models import Profile, UserRole


class RoleLookup(Protocol):
    def is_teacher(self, identity_id: Optional[str]) -> bool:
        ...


class RoleDirectory:
    """Read-only role lookup that bypasses row filtering."""

    def __init__(self, db: Session) -> None:
        self._db = db

    def role_of(self, identity_id: Optional[str]) -> Optional[UserRole]:
        if not identity_id:
            return None
        return self._db.execute(
            select(Profile.role).where(Profile.id == identity_id)
        ).scalar_one_or_none()

    def is_teacher(self, identity_id: Optional[str]) -> bool:
        return self.role_of(identity_id) == UserRole.TEACHER


class StaticRoles:
    """In-memory ``RoleLookup`` keyed by identity id, for callers without a session."""

    def __init__(self, roles: Optional[Dict[str, UserRole]] = None) -> None:
        self._roles = dict(roles or {})

    def is_teacher(self, identity_id: Optional[str]) -> bool:
        return identity_id is not None and self._roles.get(identity_id) == UserRole.TEACHER
