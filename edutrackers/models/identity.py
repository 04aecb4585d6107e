"""Identity and Profile models.

An ``Identity`` is the authenticated principal (credentials + signup metadata).
A ``Profile`` is the application record bound 1:1 to it; it is never inserted
directly, see ``edutrackers.provisioning``.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy import DateTime, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.types import JSON

from edutrackers.db import Base
from edutrackers.models._common import enum_type, new_id, utcnow
from edutrackers.models.enums import UserRole


class Identity(Base):
    """Authenticated principal."""

    __tablename__ = "identities"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    # signup metadata: {"full_name", "role", "roll_number", "course", "department", "phone"}
    raw_user_meta_data: Mapped[Dict[str, Any]] = mapped_column(JSON, default=dict)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, nullable=False
    )

    profile: Mapped[Optional["Profile"]] = relationship(
        back_populates="identity",
        uselist=False,
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<Identity(id={self.id}, email={self.email})>"


class Profile(Base):
    """Role-bearing profile, one per identity."""

    __tablename__ = "profiles"

    id: Mapped[str] = mapped_column(
        ForeignKey("identities.id", ondelete="CASCADE"), primary_key=True
    )
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    full_name: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[UserRole] = mapped_column(
        enum_type(UserRole), nullable=False
    )

    # students
    roll_number: Mapped[Optional[str]] = mapped_column(String(64))
    course: Mapped[Optional[str]] = mapped_column(String(255))
    # teachers
    department: Mapped[Optional[str]] = mapped_column(String(255))

    phone: Mapped[Optional[str]] = mapped_column(String(32))
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False
    )

    identity: Mapped[Identity] = relationship(back_populates="profile")
    assignments: Mapped[List["Assignment"]] = relationship(  # noqa: F821
        back_populates="teacher", cascade="all, delete-orphan", passive_deletes=True
    )
    submissions: Mapped[List["Submission"]] = relationship(  # noqa: F821
        back_populates="student", cascade="all, delete-orphan", passive_deletes=True
    )

    def __repr__(self) -> str:
        return f"<Profile(id={self.id}, role={self.role.value})>"
