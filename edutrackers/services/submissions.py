"""Submission grading."""

from typing import Optional

from edutrackers.errors import ConstraintViolation
from edutrackers.models import Submission, SubmissionStatus
from edutrackers.store import ScopedStore


def grade_submission(
    store: ScopedStore, submission_id: str, grade: float, feedback: Optional[str] = None
) -> Submission:
    """Record a grade (and optional feedback) and mark the submission graded."""

    if grade < 0:
        raise ConstraintViolation("assignment_submissions_grade_check", "grade must not be negative")
    changes = {"grade": grade, "status": SubmissionStatus.GRADED}
    if feedback is not None:
        changes["feedback"] = feedback
    return store.update(Submission, submission_id, **changes)
