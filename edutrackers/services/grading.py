"""Percentage, letter grade and average computations for exam results."""

from typing import Iterable, List, Optional, Protocol, Tuple

# (minimum percentage, letter), checked top-down
GRADE_BANDS: List[Tuple[float, str]] = [
    (90.0, "A+"),
    (80.0, "A"),
    (70.0, "B"),
    (60.0, "C"),
    (50.0, "D"),
]
FAILING_GRADE = "F"


class Scored(Protocol):
    marks_obtained: float
    total_marks: float


def percentage(marks_obtained: float, total_marks: float) -> float:
    """``marks_obtained / total_marks * 100`` rounded to two places.

    ``total_marks`` must be positive; the results table enforces the same rule.
    """

    if total_marks <= 0:
        raise ValueError("total_marks must be greater than zero")
    if marks_obtained < 0:
        raise ValueError("marks_obtained must not be negative")
    return round(marks_obtained / total_marks * 100, 2)


def letter_grade(percent: float) -> str:
    for threshold, letter in GRADE_BANDS:
        if percent >= threshold:
            return letter
    return FAILING_GRADE


def average_percentage(results: Iterable[Scored]) -> Optional[float]:
    """Mean of per-result percentages, ``None`` when there are no results."""

    values = [percentage(r.marks_obtained, r.total_marks) for r in results]
    if not values:
        return None
    return round(sum(values) / len(values), 1)


def marks_totals(results: Iterable[Scored]) -> Tuple[float, float]:
    obtained = 0.0
    total = 0.0
    for r in results:
        obtained += r.marks_obtained
        total += r.total_marks
    return obtained, total
