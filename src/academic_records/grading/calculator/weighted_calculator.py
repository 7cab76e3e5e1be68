from __future__ import annotations

from ...core.constants import GPA_ASSIGNMENT_WEIGHT, GPA_ATTENDANCE_WEIGHT, GPA_SCALE
from ..distribution import round2
from ..model import GpaInputs
from .base import GpaCalculator


class WeightedGpaCalculator(GpaCalculator):
    """Standard rule: 60% assignment average + 40% attendance rate, on a 4.0 scale."""

    def __init__(
        self,
        *,
        assignment_weight: float = GPA_ASSIGNMENT_WEIGHT,
        attendance_weight: float = GPA_ATTENDANCE_WEIGHT,
        scale: float = GPA_SCALE,
    ):
        self._assignment_weight = assignment_weight
        self._attendance_weight = attendance_weight
        self._scale = scale

    def gpa(self, inputs: GpaInputs) -> float:
        assignment_score = inputs.average_score / 100 * self._scale
        value = assignment_score * self._assignment_weight + inputs.attendance_rate * self._scale * self._attendance_weight
        value = round2(value)
        assert 0.0 <= value <= self._scale, f"GPA out of range: {value}"
        return value
