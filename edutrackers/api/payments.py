"""Payment endpoints. Every write is teacher-only, including "pay now"."""

from datetime import date, datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel, Field

from edutrackers.dependencies import get_store
from edutrackers.models import Payment, PaymentStatus
from edutrackers.services import payments as payment_service
from edutrackers.store import ScopedStore

router = APIRouter()


# === Schemas ===

class PaymentCreate(BaseModel):
    student_id: str
    amount: float = Field(ge=0)
    payment_type: str = Field(min_length=1)
    due_date: date
    semester: Optional[str] = None


class StatusUpdate(BaseModel):
    status: PaymentStatus
    paid_date: Optional[date] = None


class PaymentResponse(BaseModel):
    id: str
    student_id: str
    amount: float
    payment_type: str
    status: PaymentStatus
    due_date: date
    paid_date: Optional[date]
    semester: Optional[str]
    created_at: datetime

    class Config:
        from_attributes = True


class PaymentListResponse(BaseModel):
    payments: List[PaymentResponse]
    total: int


class PaymentSummary(BaseModel):
    total_pending: float
    total_paid: float
    total_overdue: float
    count: int


# === Helpers ===

def _visible_payments(
    store: ScopedStore, student_id: Optional[str], status_filter: Optional[PaymentStatus]
) -> List[Payment]:
    criteria = []
    if student_id:
        criteria.append(Payment.student_id == student_id)
    if status_filter:
        criteria.append(Payment.status == status_filter)
    return store.select(Payment, *criteria, order_by=[Payment.due_date.asc()])


# === Endpoints ===

@router.get("/", response_model=PaymentListResponse)
async def list_payments(
    student_id: Optional[str] = None,
    status_filter: Optional[PaymentStatus] = Query(default=None, alias="status"),
    store: ScopedStore = Depends(get_store),
):
    payments = _visible_payments(store, student_id, status_filter)
    return {"payments": payments, "total": len(payments)}


@router.get("/summary", response_model=PaymentSummary)
async def summarize_payments(
    student_id: Optional[str] = None,
    store: ScopedStore = Depends(get_store),
):
    """Running totals per status over the caller's visible payments."""
    return payment_service.summarize(_visible_payments(store, student_id, None))


@router.post("/", response_model=PaymentResponse, status_code=status.HTTP_201_CREATED)
async def create_payment(data: PaymentCreate, store: ScopedStore = Depends(get_store)):
    return store.insert(Payment, status=PaymentStatus.PENDING, **data.model_dump())


@router.get("/{payment_id}", response_model=PaymentResponse)
async def get_payment(payment_id: str, store: ScopedStore = Depends(get_store)):
    payment = store.get(Payment, payment_id)
    if payment is None:
        raise HTTPException(status_code=404, detail="payment not found")
    return payment


@router.patch("/{payment_id}/status", response_model=PaymentResponse)
async def update_status(
    payment_id: str, data: StatusUpdate, store: ScopedStore = Depends(get_store)
):
    return payment_service.set_status(store, payment_id, data.status, data.paid_date)


@router.post("/{payment_id}/pay", response_model=PaymentResponse)
async def pay(payment_id: str, store: ScopedStore = Depends(get_store)):
    """Mark a payment paid today. Students calling this are rejected by the payments rule."""
    return payment_service.mark_paid(store, payment_id)


@router.delete("/{payment_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_payment(payment_id: str, store: ScopedStore = Depends(get_store)):
    store.delete(Payment, payment_id)
