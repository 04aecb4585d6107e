"""Exam result endpoints."""

from datetime import date, datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field

from edutrackers.dependencies import get_store
from edutrackers.models import Result
from edutrackers.services.grading import average_percentage, marks_totals
from edutrackers.store import ScopedStore

router = APIRouter()


# === Schemas ===

class ResultCreate(BaseModel):
    student_id: str
    exam_type: str = Field(min_length=1)
    subject: str = Field(min_length=1)
    marks_obtained: float = Field(ge=0)
    total_marks: float = Field(gt=0)
    exam_date: date
    remarks: Optional[str] = None


class ResultUpdate(BaseModel):
    exam_type: Optional[str] = Field(default=None, min_length=1)
    subject: Optional[str] = Field(default=None, min_length=1)
    marks_obtained: Optional[float] = Field(default=None, ge=0)
    total_marks: Optional[float] = Field(default=None, gt=0)
    exam_date: Optional[date] = None
    remarks: Optional[str] = None


class ResultResponse(BaseModel):
    id: str
    student_id: str
    teacher_id: str
    exam_type: str
    subject: str
    marks_obtained: float
    total_marks: float
    exam_date: date
    remarks: Optional[str]
    created_at: datetime
    percentage: float
    letter_grade: str

    class Config:
        from_attributes = True


class ResultListResponse(BaseModel):
    results: List[ResultResponse]
    total: int


class ResultSummary(BaseModel):
    count: int
    average_percentage: Optional[float]
    marks_obtained: float
    total_marks: float


# === Helpers ===

def _visible_results(store: ScopedStore, student_id: Optional[str], mine: bool) -> List[Result]:
    criteria = []
    if student_id:
        criteria.append(Result.student_id == student_id)
    if mine:
        criteria.append(Result.teacher_id == store.requester_id)
    return store.select(Result, *criteria, order_by=[Result.exam_date.desc()])


# === Endpoints ===

@router.get("/", response_model=ResultListResponse)
async def list_results(
    student_id: Optional[str] = None,
    mine: bool = False,
    store: ScopedStore = Depends(get_store),
):
    """Visible results, latest exam first. ``mine`` narrows to results the caller recorded."""
    results = _visible_results(store, student_id, mine)
    return {"results": results, "total": len(results)}


@router.get("/summary", response_model=ResultSummary)
async def summarize_results(
    student_id: Optional[str] = None,
    store: ScopedStore = Depends(get_store),
):
    results = _visible_results(store, student_id, mine=False)
    obtained, total = marks_totals(results)
    return {
        "count": len(results),
        "average_percentage": average_percentage(results),
        "marks_obtained": obtained,
        "total_marks": total,
    }


@router.post("/", response_model=ResultResponse, status_code=status.HTTP_201_CREATED)
async def create_result(data: ResultCreate, store: ScopedStore = Depends(get_store)):
    return store.insert(Result, teacher_id=store.requester_id, **data.model_dump())


@router.get("/{result_id}", response_model=ResultResponse)
async def get_result(result_id: str, store: ScopedStore = Depends(get_store)):
    result = store.get(Result, result_id)
    if result is None:
        raise HTTPException(status_code=404, detail="result not found")
    return result


@router.patch("/{result_id}", response_model=ResultResponse)
async def update_result(result_id: str, data: ResultUpdate, store: ScopedStore = Depends(get_store)):
    return store.update(Result, result_id, **data.model_dump(exclude_unset=True))
