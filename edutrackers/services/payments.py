"""Payment status transitions and running totals."""

from datetime import date
from typing import Dict, FrozenSet, Iterable, Optional

from edutrackers.errors import ConstraintViolation
from edutrackers.models import Payment, PaymentStatus
from edutrackers.store import ScopedStore

# status -> statuses it may move to; nothing returns to pending and paid is terminal
ALLOWED_TRANSITIONS: Dict[PaymentStatus, FrozenSet[PaymentStatus]] = {
    PaymentStatus.PENDING: frozenset({PaymentStatus.PAID, PaymentStatus.OVERDUE}),
    PaymentStatus.OVERDUE: frozenset({PaymentStatus.PAID}),
    PaymentStatus.PAID: frozenset(),
}


def can_transition(current: PaymentStatus, target: PaymentStatus) -> bool:
    return target == current or target in ALLOWED_TRANSITIONS[current]


def set_status(
    store: ScopedStore,
    payment_id: str,
    status: PaymentStatus,
    paid_date: Optional[date] = None,
) -> Payment:
    """Move a payment to ``status``; marking it paid stamps ``paid_date`` (today by default).

    Authorization is the store's job: only teachers pass the payments update rule,
    whichever client action triggered the call.
    """

    payment = store.get(Payment, payment_id)
    current = payment.status if payment is not None else None
    if current is not None and not can_transition(current, status):
        raise ConstraintViolation(
            "payment_status_transition",
            f"cannot move payment from {current.value} to {status.value}",
        )

    changes = {"status": status}
    if status == PaymentStatus.PAID and current != PaymentStatus.PAID:
        changes["paid_date"] = paid_date or date.today()
    return store.update(Payment, payment_id, **changes)


def mark_paid(store: ScopedStore, payment_id: str, paid_date: Optional[date] = None) -> Payment:
    return set_status(store, payment_id, PaymentStatus.PAID, paid_date)


def total_by_status(payments: Iterable[Payment], status: PaymentStatus) -> float:
    return sum(p.amount for p in payments if p.status == status)


def summarize(payments: Iterable[Payment]) -> Dict[str, float]:
    rows = list(payments)
    return {
        "total_pending": total_by_status(rows, PaymentStatus.PENDING),
        "total_paid": total_by_status(rows, PaymentStatus.PAID),
        "total_overdue": total_by_status(rows, PaymentStatus.OVERDUE),
        "count": len(rows),
    }
