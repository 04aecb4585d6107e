"""Enumerations shared by the models and the policy table."""

import enum


class UserRole(str, enum.Enum):
    """Profile role, fixed at signup."""
    STUDENT = "student"
    TEACHER = "teacher"


class SubmissionStatus(str, enum.Enum):
    """Submission lifecycle. A graded submission is never reopened."""
    SUBMITTED = "submitted"
    GRADED = "graded"


class PaymentStatus(str, enum.Enum):
    """Payment status. Transitions only move forward (see ``services.payments``)."""
    PENDING = "pending"
    PAID = "paid"
    OVERDUE = "overdue"


class Bucket(str, enum.Enum):
    """Object storage buckets."""
    ASSIGNMENTS = "assignments"
    SUBMISSIONS = "submissions"
