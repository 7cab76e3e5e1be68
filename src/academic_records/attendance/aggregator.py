"""Counting logic shared by the per-course, per-student and organisation reports."""

from __future__ import annotations

from collections import Counter
from typing import Iterable, Union

from ..core.enums import AttendanceStatus, GroupBy
from .model import AttendanceRecord, AttendanceSummary


def percentage(part: int, total: int) -> int:
    """round(part / total * 100), half-up; 0 when total is 0."""
    if total <= 0:
        return 0
    return (part * 200 + total) // (2 * total)


def summarize(key: str, records: Iterable[AttendanceRecord]) -> AttendanceSummary:
    counts = Counter(r.status for r in records)
    total = sum(counts.values())
    present = counts[AttendanceStatus.PRESENT]
    return AttendanceSummary(
        key=key,
        total=total,
        present=present,
        absent=counts[AttendanceStatus.ABSENT],
        late=counts[AttendanceStatus.LATE],
        percentage=percentage(present, total),
    )


def aggregate(records: Iterable[AttendanceRecord], group_by: Union[GroupBy, str]) -> dict[str, AttendanceSummary]:
    group_by = GroupBy(group_by)
    groups: dict[str, list[AttendanceRecord]] = {}
    for r in records:
        key = r.course_id if group_by == GroupBy.COURSE else r.student_id
        groups.setdefault(key, []).append(r)
    return {key: summarize(key, groups[key]) for key in sorted(groups)}


def overall_percentage(records: Iterable[AttendanceRecord]) -> int:
    return summarize("*", records).percentage
