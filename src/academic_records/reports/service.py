from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..common.validators import require_float_range, require_int_range
from ..core.constants import GPA_SCALE, MAX_SEMESTER, MIN_SEMESTER
from ..core.exceptions import AuthorizationError, NotFoundError
from ..grading.service import GpaService
from ..scope.model import Scope
from ..users.repository import IdentityRepository
from .model import Report
from .repository import ReportRepository

logger = logging.getLogger(__name__)

# Marks "leave the stored remarks alone"; None clears them.
UNCHANGED = object()


class ReportService:
    def __init__(self, reports: ReportRepository, identities: IdentityRepository, gpa: GpaService):
        self._reports = reports
        self._identities = identities
        self._gpa = gpa

    def _require_visible_student(self, scope: Scope, student_id: str) -> None:
        if not self._identities.get_students([student_id]):
            raise NotFoundError("Student not found")
        if not scope.can_view_student(student_id):
            raise AuthorizationError("Forbidden")

    def _get_visible(self, scope: Scope, report_id: str) -> Report:
        report = self._reports.get_by_id(report_id)
        if not report:
            raise NotFoundError("Report not found")
        if not scope.can_view_student(report.student_id):
            raise AuthorizationError("Forbidden")
        return report

    def generate(
        self,
        scope: Scope,
        *,
        student_id: str,
        semester,
        remarks: Optional[str] = None,
    ) -> tuple[Report, bool]:
        """Create or refresh the (student, semester) report. Returns (report, created)."""
        if scope.is_student:
            raise AuthorizationError("Only teachers and admins can generate reports")
        semester = require_int_range(semester, "semester", MIN_SEMESTER, MAX_SEMESTER)
        self._require_visible_student(scope, student_id)

        gpa = self._gpa.compute_gpa(student_id)
        existing = self._reports.get_for_student_semester(student_id, semester)
        if existing:
            kept = remarks if remarks is not None else existing.remarks
            report = self._reports.update(report_id=existing.report_id, gpa=gpa, remarks=kept) or existing
            logger.info("Report %s refreshed: student=%s semester=%d gpa=%.2f", report.report_id, student_id, semester, gpa)
            return report, False

        report = self._reports.create(student_id=student_id, semester=semester, gpa=gpa, remarks=remarks)
        logger.info("Report %s created: student=%s semester=%d gpa=%.2f", report.report_id, student_id, semester, gpa)
        return report, True

    def get_report(self, scope: Scope, *, report_id: str) -> Report:
        return self._get_visible(scope, report_id)

    def update_report(
        self,
        scope: Scope,
        *,
        report_id: str,
        gpa=None,
        remarks=UNCHANGED,
        semester=None,
    ) -> Report:
        """Edit a stored report.

        A missing ``gpa`` is recomputed from the student's current data.
        ``semester`` moves the report, which conflicts when the target is taken.
        """
        if scope.is_student:
            raise AuthorizationError("Only teachers and admins can update reports")
        report = self._get_visible(scope, report_id)

        if gpa is None:
            gpa = self._gpa.compute_gpa(report.student_id)
        else:
            gpa = require_float_range(gpa, "gpa", 0.0, GPA_SCALE)
        if semester is not None:
            semester = require_int_range(semester, "semester", MIN_SEMESTER, MAX_SEMESTER)
        kept = report.remarks if remarks is UNCHANGED else remarks

        updated = self._reports.update(report_id=report_id, gpa=gpa, remarks=kept, semester=semester)
        if not updated:
            raise NotFoundError("Report not found")
        logger.info("Report %s updated by %s: gpa=%.2f semester=%d", report_id, scope.identity_id, gpa, updated.semester)
        return updated

    def list_reports(
        self,
        scope: Scope,
        *,
        student_id: Optional[str] = None,
        semester: Optional[int] = None,
    ) -> Sequence[Report]:
        student_ids = scope.student_filter()
        if student_id:
            student_ids = frozenset({student_id}) if student_ids is None else student_ids & {student_id}
        rows = self._reports.list_reports(student_ids=student_ids, semester=semester)
        return [r for r in rows if scope.can_view_student(r.student_id)]

    def student_gpa(self, scope: Scope, *, student_id: str, course_id: Optional[str] = None) -> dict:
        if not scope.can_view_student(student_id):
            raise AuthorizationError("Forbidden")
        # Teachers only see the GPA slice of their own courses.
        if course_id and scope.is_teacher and not scope.can_mutate_course(course_id):
            raise AuthorizationError("You can only view GPA for your own courses")
        return {
            "studentId": student_id,
            "courseId": course_id,
            "gpa": self._gpa.compute_gpa(student_id, course_id),
        }
