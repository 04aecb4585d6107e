"""Profile endpoints. Students only ever see themselves; teachers see everyone."""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from edutrackers.api.auth import ProfileResponse
from edutrackers.dependencies import get_store
from edutrackers.models import Profile, UserRole
from edutrackers.store import ScopedStore

router = APIRouter()


# === Schemas ===

class ProfileUpdate(BaseModel):
    """Self-service fields. ``role`` and ``email`` are not accepted."""

    full_name: Optional[str] = None
    roll_number: Optional[str] = None
    course: Optional[str] = None
    department: Optional[str] = None
    phone: Optional[str] = None

    class Config:
        extra = "forbid"


class ProfileListResponse(BaseModel):
    profiles: List[ProfileResponse]
    total: int


# === Endpoints ===

@router.get("/", response_model=ProfileListResponse)
async def list_profiles(role: Optional[UserRole] = None, store: ScopedStore = Depends(get_store)):
    criteria = [Profile.role == role] if role else []
    profiles = store.select(Profile, *criteria, order_by=[Profile.full_name])
    return {"profiles": profiles, "total": len(profiles)}


@router.patch("/me", response_model=ProfileResponse)
async def update_my_profile(data: ProfileUpdate, store: ScopedStore = Depends(get_store)):
    return store.update(Profile, store.requester_id, **data.model_dump(exclude_unset=True))


@router.get("/{profile_id}", response_model=ProfileResponse)
async def get_profile(profile_id: str, store: ScopedStore = Depends(get_store)):
    profile = store.get(Profile, profile_id)
    if profile is None:
        raise HTTPException(status_code=404, detail="profile not found")
    return profile
