"""Signup, login and current-profile endpoints."""

from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Form, HTTPException, status
from pydantic import BaseModel, Field
from sqlalchemy import select
from sqlalchemy.orm import Session

from edutrackers.db import get_db
from edutrackers.dependencies import get_current_profile
from edutrackers.models import Identity, Profile, UserRole
from edutrackers.provisioning import sign_up
from edutrackers.security.tokens import create_token, verify_password

router = APIRouter()


# === Schemas ===

class Token(BaseModel):
    access_token: str
    token_type: str


class SignupRequest(BaseModel):
    email: str = Field(min_length=3, max_length=255)
    password: str = Field(min_length=6)
    full_name: Optional[str] = None
    role: Optional[UserRole] = None
    roll_number: Optional[str] = None
    course: Optional[str] = None
    department: Optional[str] = None
    phone: Optional[str] = None


class ProfileResponse(BaseModel):
    id: str
    email: str
    full_name: str
    role: UserRole
    roll_number: Optional[str]
    course: Optional[str]
    department: Optional[str]
    phone: Optional[str]
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


# === Endpoints ===

@router.post("/signup", response_model=ProfileResponse, status_code=status.HTTP_201_CREATED)
async def signup(data: SignupRequest, db: Session = Depends(get_db)):
    """Register an identity; its profile is provisioned in the same transaction."""
    metadata = data.model_dump(exclude={"email", "password"}, exclude_none=True, mode="json")
    return sign_up(db, data.email, data.password, metadata)


@router.post("/login", response_model=Token)
async def login(
    username: str = Form(...),
    password: str = Form(...),
    db: Session = Depends(get_db),
):
    """Exchange email/password for a bearer token."""
    identity = db.scalars(
        select(Identity).where(Identity.email == username.strip().lower())
    ).first()
    if not identity or not verify_password(password, identity.password_hash):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password",
        )
    return {"access_token": create_token(identity.id), "token_type": "bearer"}


@router.get("/me", response_model=ProfileResponse)
async def me(current: Profile = Depends(get_current_profile)):
    return current
