"""Exam result model."""

from datetime import date, datetime
from typing import Optional

from sqlalchemy import CheckConstraint, Date, DateTime, Float, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from edutrackers.db import Base
from edutrackers.models._common import new_id, utcnow
from edutrackers.services.grading import letter_grade, percentage


class Result(Base):
    """Marks recorded by a teacher for one student and one exam."""

    __tablename__ = "results"
    __table_args__ = (
        CheckConstraint("marks_obtained >= 0", name="results_marks_obtained_check"),
        CheckConstraint("total_marks > 0", name="results_total_marks_check"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    student_id: Mapped[str] = mapped_column(
        ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False
    )
    teacher_id: Mapped[str] = mapped_column(
        ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False
    )
    exam_type: Mapped[str] = mapped_column(String(64), nullable=False)  # CT / Midterm / Final
    subject: Mapped[str] = mapped_column(String(255), nullable=False)
    marks_obtained: Mapped[float] = mapped_column(Float, nullable=False)
    total_marks: Mapped[float] = mapped_column(Float, nullable=False)
    exam_date: Mapped[date] = mapped_column(Date, nullable=False)
    remarks: Mapped[Optional[str]] = mapped_column(Text)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, nullable=False
    )

    @property
    def percentage(self) -> float:
        return percentage(self.marks_obtained, self.total_marks)

    @property
    def letter_grade(self) -> str:
        return letter_grade(self.percentage)

    def __repr__(self) -> str:
        return f"<Result(id={self.id}, subject={self.subject}, exam_type={self.exam_type})>"
