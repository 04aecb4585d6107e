"""Per-role dashboard counters, computed through the scoped store."""

from typing import Dict

from edutrackers.models import (
    Assignment,
    Payment,
    PaymentStatus,
    Profile,
    Submission,
    SubmissionStatus,
    UserRole,
)
from edutrackers.store import ScopedStore


def teacher_dashboard(store: ScopedStore) -> Dict[str, int]:
    return {
        "total_assignments": store.count(Assignment, Assignment.teacher_id == store.requester_id),
        "total_students": store.count(Profile, Profile.role == UserRole.STUDENT),
        "total_submissions": store.count(Submission),
        "pending_payments": store.count(Payment, Payment.status == PaymentStatus.PENDING),
    }


def student_dashboard(store: ScopedStore) -> Dict[str, int]:
    mine = Submission.student_id == store.requester_id
    return {
        "total_assignments": store.count(Assignment),
        "submitted_assignments": store.count(Submission, mine),
        "graded_assignments": store.count(
            Submission, mine, Submission.status == SubmissionStatus.GRADED
        ),
        "pending_payments": store.count(
            Payment,
            Payment.student_id == store.requester_id,
            Payment.status == PaymentStatus.PENDING,
        ),
    }


def dashboard_for(store: ScopedStore) -> Dict[str, int]:
    if store.is_teacher():
        return teacher_dashboard(store)
    return student_dashboard(store)
