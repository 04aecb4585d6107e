"""Announcement endpoints. Announcements are created and deleted, never edited."""

from datetime import datetime
from typing import List

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from edutrackers.dependencies import get_store
from edutrackers.models import Announcement
from edutrackers.store import ScopedStore

router = APIRouter()


class AnnouncementCreate(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    message: str = Field(min_length=1)


class AnnouncementResponse(BaseModel):
    id: str
    teacher_id: str
    title: str
    message: str
    created_at: datetime

    class Config:
        from_attributes = True


class AnnouncementListResponse(BaseModel):
    announcements: List[AnnouncementResponse]
    total: int


@router.get("/", response_model=AnnouncementListResponse)
async def list_announcements(store: ScopedStore = Depends(get_store)):
    announcements = store.select(Announcement, order_by=[Announcement.created_at.desc()])
    return {"announcements": announcements, "total": len(announcements)}


@router.post("/", response_model=AnnouncementResponse, status_code=status.HTTP_201_CREATED)
async def create_announcement(data: AnnouncementCreate, store: ScopedStore = Depends(get_store)):
    return store.insert(Announcement, teacher_id=store.requester_id, **data.model_dump())


@router.delete("/{announcement_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_announcement(announcement_id: str, store: ScopedStore = Depends(get_store)):
    store.delete(Announcement, announcement_id)
