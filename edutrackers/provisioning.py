"""Profile provisioning tied to identity creation.

A mapper ``after_insert`` listener on ``Identity`` inserts the matching
``profiles`` row on the same connection, inside the same flush. If building or
inserting the profile fails, the flush fails and the caller's transaction rolls
back, so an identity never exists without its profile.
"""

import logging
from typing import Any, Dict, Mapping, Optional

from sqlalchemy import event, insert, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from edutrackers.config import get_settings
from edutrackers.errors import ConstraintViolation, ProvisioningError
from edutrackers.models import Identity, Profile, UserRole
from edutrackers.security.tokens import hash_password

logger = logging.getLogger(__name__)

DEFAULT_ROLE = UserRole.STUDENT
# copied verbatim from signup metadata when present
PROFILE_FIELDS = ("roll_number", "course", "department", "phone")


def profile_values(
    identity_id: str, email: str, metadata: Optional[Mapping[str, Any]]
) -> Dict[str, Any]:
    """Build the profile row for a new identity from its signup metadata."""

    metadata = metadata or {}
    raw_role = metadata.get("role") or DEFAULT_ROLE.value
    try:
        role = UserRole(raw_role)
    except ValueError as exc:
        raise ProvisioningError(
            "profiles_role_check", f"unknown role {raw_role!r} in signup metadata"
        ) from exc

    values: Dict[str, Any] = {
        "id": identity_id,
        "email": email,
        "full_name": metadata.get("full_name") or get_settings().default_full_name,
        "role": role,
    }
    for field in PROFILE_FIELDS:
        if metadata.get(field) is not None:
            values[field] = metadata[field]
    return values


@event.listens_for(Identity, "after_insert")
def provision_profile(_mapper, connection, target: Identity) -> None:
    values = profile_values(target.id, target.email, target.raw_user_meta_data)
    connection.execute(insert(Profile.__table__).values(**values))
    logger.info("provisioned %s profile for identity %s", values["role"].value, target.id)


def sign_up(
    db: Session, email: str, password: str, metadata: Optional[Mapping[str, Any]] = None
) -> Profile:
    """Create an identity and, atomically with it, its profile."""

    email = email.strip().lower()
    if db.execute(select(Identity.id).where(Identity.email == email)).first():
        raise ConstraintViolation("identities_email_key", "email already registered")

    identity = Identity(
        email=email,
        password_hash=hash_password(password),
        raw_user_meta_data=dict(metadata or {}),
    )
    db.add(identity)
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise ConstraintViolation("identities_email_key", "email already registered") from exc
    except Exception:
        db.rollback()
        raise

    profile = db.get(Profile, identity.id)
    if profile is None:
        # after_insert always writes the profile; reaching here means the listener was detached
        raise ProvisioningError("profiles_pkey", f"no profile provisioned for {identity.id}")
    return profile
