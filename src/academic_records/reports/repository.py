from __future__ import annotations

from typing import Iterable, Optional, Protocol, Sequence

from .model import Report


class ReportRepository(Protocol):
    def get_by_id(self, report_id: str) -> Optional[Report]:
        raise NotImplementedError

    def get_for_student_semester(self, student_id: str, semester: int) -> Optional[Report]:
        raise NotImplementedError

    def create(self, *, student_id: str, semester: int, gpa: float, remarks: Optional[str]) -> Report:
        raise NotImplementedError

    def update(
        self,
        *,
        report_id: str,
        gpa: float,
        remarks: Optional[str],
        semester: Optional[int] = None,
    ) -> Optional[Report]:
        """Overwrite gpa and remarks; move to ``semester`` when given.

        Raises ConflictError when the student already has a report for that semester.
        """

        raise NotImplementedError

    def list_reports(
        self,
        *,
        student_ids: Optional[Iterable[str]] = None,
        semester: Optional[int] = None,
    ) -> Sequence[Report]:
        """``student_ids=None`` means unrestricted; empty matches nothing."""

        raise NotImplementedError

    def latest_for_students(self, student_ids: Iterable[str]) -> dict[str, Report]:
        """Most recently updated report per student."""

        raise NotImplementedError
