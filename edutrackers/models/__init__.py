"""SQLAlchemy models."""

from edutrackers.models.enums import Bucket, PaymentStatus, SubmissionStatus, UserRole
from edutrackers.models.identity import Identity, Profile
from edutrackers.models.assignment import Assignment, Submission
from edutrackers.models.result import Result
from edutrackers.models.payment import Payment
from edutrackers.models.announcement import Announcement

__all__ = [
    "Announcement",
    "Assignment",
    "Bucket",
    "Identity",
    "Payment",
    "PaymentStatus",
    "Profile",
    "Result",
    "Submission",
    "SubmissionStatus",
    "UserRole",
]
