"""FastAPI dependencies: current identity and the per-request scoped store."""

from typing import Optional

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.orm import Session

from edutrackers.db import get_db
from edutrackers.models import Profile
from edutrackers.security.tokens import decode_token
from edutrackers.store import ScopedStore


def get_current_profile(
    authorization: Optional[str] = Header(None),
    db: Session = Depends(get_db),
) -> Profile:
    """Resolve the bearer token to the caller's profile."""
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    if not authorization or not authorization.startswith("Bearer "):
        raise credentials_exception

    payload = decode_token(authorization[7:])
    if not payload or not payload.get("sub"):
        raise credentials_exception

    # own-profile lookup by primary key; the profile rule always allows it
    profile = db.get(Profile, payload["sub"])
    if profile is None:
        raise credentials_exception
    return profile


def get_store(
    current: Profile = Depends(get_current_profile),
    db: Session = Depends(get_db),
) -> ScopedStore:
    """Store bound to the authenticated caller."""
    return ScopedStore(db, current.id)
