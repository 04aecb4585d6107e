"""Submission endpoints: students submit once per assignment, teachers grade."""

from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field

from edutrackers.dependencies import get_store
from edutrackers.models import Submission, SubmissionStatus
from edutrackers.services.submissions import grade_submission
from edutrackers.store import ScopedStore

router = APIRouter()


# === Schemas ===

class SubmissionCreate(BaseModel):
    assignment_id: str
    file_url: Optional[str] = None
    file_name: Optional[str] = None


class GradeRequest(BaseModel):
    grade: float = Field(ge=0)
    feedback: Optional[str] = None


class SubmissionResponse(BaseModel):
    id: str
    assignment_id: str
    student_id: str
    file_url: Optional[str]
    file_name: Optional[str]
    submitted_at: datetime
    status: SubmissionStatus
    grade: Optional[float]
    feedback: Optional[str]

    class Config:
        from_attributes = True


class SubmissionListResponse(BaseModel):
    submissions: List[SubmissionResponse]
    total: int


# === Endpoints ===

@router.get("/", response_model=SubmissionListResponse)
async def list_submissions(
    assignment_id: Optional[str] = None,
    store: ScopedStore = Depends(get_store),
):
    """Visible submissions: a student's own, or every submission for a teacher."""
    criteria = [Submission.assignment_id == assignment_id] if assignment_id else []
    submissions = store.select(Submission, *criteria, order_by=[Submission.submitted_at.desc()])
    return {"submissions": submissions, "total": len(submissions)}


@router.post("/", response_model=SubmissionResponse, status_code=status.HTTP_201_CREATED)
async def create_submission(data: SubmissionCreate, store: ScopedStore = Depends(get_store)):
    return store.insert(Submission, student_id=store.requester_id, **data.model_dump())


@router.get("/{submission_id}", response_model=SubmissionResponse)
async def get_submission(submission_id: str, store: ScopedStore = Depends(get_store)):
    submission = store.get(Submission, submission_id)
    if submission is None:
        raise HTTPException(status_code=404, detail="submission not found")
    return submission


@router.patch("/{submission_id}/grade", response_model=SubmissionResponse)
async def grade(submission_id: str, data: GradeRequest, store: ScopedStore = Depends(get_store)):
    return grade_submission(store, submission_id, data.grade, data.feedback)
