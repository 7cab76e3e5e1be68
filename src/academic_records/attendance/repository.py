from __future__ import annotations

from datetime import date
from typing import Iterable, Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus
from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def get_by_id(self, attendance_id: str) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def get_for_student_course_day(self, student_id: str, course_id: str, day: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def create(
        self,
        *,
        student_id: str,
        course_id: str,
        day: date,
        status: AttendanceStatus,
    ) -> AttendanceRecord:
        """Insert a row; raises ConflictError when (student, course, day) is taken."""

        raise NotImplementedError

    def update(self, *, attendance_id: str, day: date, status: AttendanceStatus) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def delete(self, attendance_id: str) -> bool:
        raise NotImplementedError

    def list_records(
        self,
        *,
        course_ids: Optional[Iterable[str]] = None,
        student_ids: Optional[Iterable[str]] = None,
    ) -> Sequence[AttendanceRecord]:
        """``None`` means unrestricted; an empty collection matches nothing."""

        raise NotImplementedError

    def list_student_ids_for_courses(self, course_ids: Iterable[str]) -> set[str]:
        raise NotImplementedError
