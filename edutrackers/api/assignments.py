"""Assignment endpoints."""

from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field

from edutrackers.dependencies import get_store
from edutrackers.models import Assignment
from edutrackers.store import ScopedStore

router = APIRouter()


# === Schemas ===

class AssignmentCreate(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    description: Optional[str] = None
    course: Optional[str] = None
    due_date: Optional[datetime] = None
    file_url: Optional[str] = None
    file_name: Optional[str] = None


class AssignmentUpdate(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = None
    course: Optional[str] = None
    due_date: Optional[datetime] = None
    file_url: Optional[str] = None
    file_name: Optional[str] = None


class AssignmentResponse(BaseModel):
    id: str
    teacher_id: str
    title: str
    description: Optional[str]
    course: Optional[str]
    due_date: Optional[datetime]
    file_url: Optional[str]
    file_name: Optional[str]
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class AssignmentListResponse(BaseModel):
    assignments: List[AssignmentResponse]
    total: int


# === Endpoints ===

@router.get("/", response_model=AssignmentListResponse)
async def list_assignments(
    mine: bool = False,
    course: Optional[str] = None,
    store: ScopedStore = Depends(get_store),
):
    """All assignments, newest first; ``mine`` narrows to the caller's own."""
    criteria = []
    if mine:
        criteria.append(Assignment.teacher_id == store.requester_id)
    if course:
        criteria.append(Assignment.course == course)
    assignments = store.select(Assignment, *criteria, order_by=[Assignment.created_at.desc()])
    return {"assignments": assignments, "total": len(assignments)}


@router.post("/", response_model=AssignmentResponse, status_code=status.HTTP_201_CREATED)
async def create_assignment(data: AssignmentCreate, store: ScopedStore = Depends(get_store)):
    return store.insert(Assignment, teacher_id=store.requester_id, **data.model_dump())


@router.get("/{assignment_id}", response_model=AssignmentResponse)
async def get_assignment(assignment_id: str, store: ScopedStore = Depends(get_store)):
    assignment = store.get(Assignment, assignment_id)
    if assignment is None:
        raise HTTPException(status_code=404, detail="assignment not found")
    return assignment


@router.patch("/{assignment_id}", response_model=AssignmentResponse)
async def update_assignment(
    assignment_id: str, data: AssignmentUpdate, store: ScopedStore = Depends(get_store)
):
    return store.update(Assignment, assignment_id, **data.model_dump(exclude_unset=True))


@router.delete("/{assignment_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_assignment(assignment_id: str, store: ScopedStore = Depends(get_store)):
    store.delete(Assignment, assignment_id)
