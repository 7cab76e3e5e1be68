"""Letter-grade bands and two-decimal averages for the grade reports."""

from __future__ import annotations

import math
from typing import Iterable

# (letter, inclusive lower bound); anything below the last bound is F.
GRADE_BANDS = (("A", 90.0), ("B", 80.0), ("C", 70.0), ("D", 60.0))


def round2(value: float) -> float:
    """Round half-up to two decimals."""
    return math.floor(value * 100 + 0.5) / 100


def average(values: Iterable[float]) -> float:
    items = list(values)
    if not items:
        return 0.0
    return round2(sum(items) / len(items))


def grade_band(grade: float) -> str:
    for letter, floor_ in GRADE_BANDS:
        if grade >= floor_:
            return letter
    return "F"


def grade_distribution(grades: Iterable[float]) -> dict[str, int]:
    counts = {letter: 0 for letter, _ in GRADE_BANDS}
    counts["F"] = 0
    for g in grades:
        counts[grade_band(g)] += 1
    return counts
