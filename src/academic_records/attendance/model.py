from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one (student, course, day) attendance mark."""

    attendance_id: str
    student_id: str
    course_id: str
    attended_on: date
    status: AttendanceStatus
    created_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "id": self.attendance_id,
            "studentId": self.student_id,
            "courseId": self.course_id,
            "date": self.attended_on.strftime("%Y-%m-%d"),
            "status": self.status.value,
        }


@dataclass(frozen=True)
class AttendanceSummary:
    """Read-model produced by the aggregator for one group key."""

    key: str
    total: int
    present: int
    absent: int
    late: int
    percentage: int

    def to_dict(self) -> dict:
        return {
            "total": self.total,
            "present": self.present,
            "absent": self.absent,
            "late": self.late,
            "percentage": self.percentage,
        }
