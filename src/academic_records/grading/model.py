from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class Assignment:
    assignment_id: str
    course_id: str
    title: str
    due_date: datetime
    points: int = 100


@dataclass(frozen=True)
class Submission:
    """A student's submission; ``grade`` (0-100) is None until graded."""

    submission_id: str
    assignment_id: str
    student_id: str
    grade: Optional[float]
    submitted_at: datetime
    course_id: Optional[str] = None


@dataclass(frozen=True)
class GpaInputs:
    """Raw figures the calculator blends into a GPA."""

    graded_scores: tuple[float, ...]
    attendance_total: int
    attendance_present: int

    @property
    def average_score(self) -> float:
        if not self.graded_scores:
            return 0.0
        return sum(self.graded_scores) / len(self.graded_scores)

    @property
    def attendance_rate(self) -> float:
        if self.attendance_total <= 0:
            return 0.0
        return self.attendance_present / self.attendance_total
