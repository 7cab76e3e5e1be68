from __future__ import annotations

import logging
from typing import Optional

from ..attendance.aggregator import summarize
from ..attendance.repository import AttendanceRepository
from .calculator.base import GpaCalculator
from .calculator.weighted_calculator import WeightedGpaCalculator
from .model import GpaInputs
from .repository import SubmissionRepository

logger = logging.getLogger(__name__)


class GpaService:
    def __init__(
        self,
        submissions: SubmissionRepository,
        attendance: AttendanceRepository,
        *,
        calculator: Optional[GpaCalculator] = None,
    ):
        self._submissions = submissions
        self._attendance = attendance
        self._calculator = calculator or WeightedGpaCalculator()

    def gather_inputs(self, student_id: str, course_id: Optional[str] = None) -> GpaInputs:
        submissions = self._submissions.list_for_student(student_id, course_id)
        scores = tuple(float(s.grade) for s in submissions if s.grade is not None)

        records = self._attendance.list_records(
            course_ids=[course_id] if course_id is not None else None,
            student_ids=[student_id],
        )
        summary = summarize(student_id, records)
        return GpaInputs(
            graded_scores=scores,
            attendance_total=summary.total,
            attendance_present=summary.present,
        )

    def compute_gpa(self, student_id: str, course_id: Optional[str] = None) -> float:
        inputs = self.gather_inputs(student_id, course_id)
        gpa = self._calculator.gpa(inputs)
        logger.debug(
            "GPA student=%s course=%s avg=%.2f rate=%.2f -> %.2f",
            student_id,
            course_id or "*",
            inputs.average_score,
            inputs.attendance_rate,
            gpa,
        )
        return gpa
